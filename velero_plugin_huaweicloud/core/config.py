from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 存储后端: obs, minio
    OBJECT_STORE_BACKEND: str = "obs"

    # 凭证设置
    # 指向凭证文件的环境变量名, 凭证文件为 KEY=value 格式
    CREDENTIALS_FILE_ENV: str = "HUAWEI_CLOUD_CREDENTIALS_FILE"
    ACCESS_KEY_ENV: str = "OBS_ACCESS_KEY"
    SECRET_KEY_ENV: str = "OBS_SECRET_KEY"

    # 列举对象时每页请求的最大数量
    LIST_MAX_KEYS: int = 1000

    # MinIO 后端在 endpoint 未带协议时是否使用 https
    MINIO_SECURE: bool = True

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"


# 创建设置实例
settings = Settings()
