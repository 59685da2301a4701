ROOT_PACKAGE_NAME = "ecrimage"
LOG_LEVEL_ENV = "ECRIMAGE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
