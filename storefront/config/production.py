"""
生产环境配置文件。
包含生产环境特定的Django配置。
"""
import os
from .base import *
from .env import *

# 生产环境禁用调试模式
DEBUG = False

# 安全配置
SECURE_SSL_REDIRECT = get_env('SECURE_SSL_REDIRECT', default=True, cast_type=bool)
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# 数据库配置
DATABASES = {
    'default': {
        'ENGINE': DB_ENGINE,
        'NAME': DB_NAME,
        'USER': DB_USER,
        'PASSWORD': DB_PASSWORD,
        'HOST': DB_HOST,
        'PORT': DB_PORT,
        'OPTIONS': {
            'charset': 'utf8mb4',
            'use_unicode': True,
        },
        'CONN_MAX_AGE': 60,  # 连接持久化
    }
}

# Redis缓存配置
CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': REDIS_URL,
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'CONNECTION_POOL_KWARGS': {'max_connections': REDIS_MAX_CONNECTIONS},
            'PASSWORD': REDIS_PASSWORD,
            'SOCKET_TIMEOUT': 5,  # 生产环境设置超时
            'SOCKET_CONNECT_TIMEOUT': 5,
            'COMPRESSOR': 'django_redis.compressors.zlib.ZlibCompressor',  # 启用压缩
        },
        'KEY_PREFIX': REDIS_KEY_PREFIX,
        'TIMEOUT': 300,
    }
}

os.makedirs(os.path.join(BASE_DIR, 'logs'), exist_ok=True)

# 日志配置 - 生产环境更关注错误和警告
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'WARNING',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'level': 'WARNING',
            'class': 'logging.FileHandler',
            'filename': os.path.join(BASE_DIR, 'logs/django.log'),
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'WARNING',
            'propagate': True,
        },
        'orders': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

# 订单模块生产环境配置
ORDER_SETTINGS = {
    'CACHE_TIMEOUT': ORDER_CACHE_TIMEOUT,
    'STRICT_STATUS_TRANSITIONS': STRICT_STATUS_TRANSITIONS,
}
