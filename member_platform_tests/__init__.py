"""
member_service tests

Covers the backend logic of the member service:

- Registration and login over HTTP (`test_auth.py`)
- Profile and membership endpoints (`test_profile.py`)
- Token issuance and validation (`test_token_guard.py`)
- Credential service edge cases such as constraint races (`test_credentials.py`)
- Settings, logging and operational endpoints (`test_config.py`, `test_app.py`)
"""
