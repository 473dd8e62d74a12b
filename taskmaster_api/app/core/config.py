"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, with defaults provided for all fields.  The
tutorial server needs little more than a port, but the hotfix toggles
for the known defects (see ``core.defects``) are configured here as
well so that a training session can switch a single defect off without
touching code.
"""

import os
from dataclasses import dataclass
from typing import List


def _env_flag(name: str, default: str = "false") -> bool:
    """Interpret an environment variable as a boolean flag."""
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "TaskMaster Pro API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Where ``run.py`` binds the server.  The original tutorial served on
    # port 3001 so the front-end could keep talking to it unchanged.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    # Comma-separated list of origins allowed by the CORS middleware.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Populate a fresh store with the demo users and sample tasks.
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA", "true")

    # Hotfix toggles.  Every known defect is active unless its toggle is
    # switched on; see ``core.defects`` for what each one changes.
    hotfix_login_comparison: bool = _env_flag("HOTFIX_LOGIN_COMPARISON")
    hotfix_complete_deletes_task: bool = _env_flag("HOTFIX_COMPLETE_DELETES_TASK")
    hotfix_auth_bypass: bool = _env_flag("HOTFIX_AUTH_BYPASS")
    hotfix_unauthenticated_tasks: bool = _env_flag("HOTFIX_UNAUTHENTICATED_TASKS")

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
