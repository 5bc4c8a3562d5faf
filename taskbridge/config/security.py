# taskbridge/config/security.py
# Security configuration for authentication and account recovery

import os
from typing import List


class SecurityConfig:
    """Security configuration for the application"""

    # Access token settings
    TOKENS = {
        'secret_key': os.getenv('SECRET_KEY', 'change-me-in-production'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 10)),  # 10 hours
    }

    # Password reset (one-time code) settings
    PASSWORD_RESET = {
        'code_length': int(os.getenv('RESET_CODE_LENGTH', 6)),
        'code_ttl_minutes': int(os.getenv('RESET_CODE_TTL_MINUTES', 15)),
    }

    # Password policy
    PASSWORDS = {
        'min_length': int(os.getenv('PASSWORD_MIN_LENGTH', 6)),
        'schemes': ['pbkdf2_sha256'],
    }

    # Roles that may be chosen at self-registration; ADMIN is provisioned only
    SELF_REGISTER_ROLES = {'USER', 'MANAGER'}

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Get allowed CORS origins from the environment"""
        raw = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000')
        return [origin.strip() for origin in raw.split(',') if origin.strip()]

    @classmethod
    def is_self_registration_role(cls, role: str) -> bool:
        """Check if a role can be picked when registering without an admin"""
        return role.upper() in cls.SELF_REGISTER_ROLES
