"""Local credential store: account registration, verification and login telemetry"""
