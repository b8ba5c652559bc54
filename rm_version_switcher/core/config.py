from pydantic_settings import BaseSettings, SettingsConfigDict

from rm_version_switcher import constants


class Settings(BaseSettings):
    PROJECT_NAME: str = constants.PROJECT_NAME

    # marker file holding the dry run next-boot selection
    DRY_RUN_FILE: str = "dry-run-boot.txt"

    DEBUG_LOG_FILE: str = "debug.log"

    # scratch mount points are created below this directory
    MOUNT_BASE_DIR: str = "/tmp"

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(case_sensitive=True, env_prefix="RM_SWITCHER_")


settings = Settings()
