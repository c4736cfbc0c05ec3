"""
Configurações para o motor de variantes da Vê Jóias.
"""

from decouple import config, Csv
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost', cast=Csv())


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',

    # Aplicações de Terceiros (Primeiro)
    'rest_framework',

    # Nossas Aplicações
    'variantes.core.apps.CoreConfig', # Entidades e Lógica Pura
    'variantes.presentation.apps.PresentationConfig', # Serializers e Carrinho de sessão
]

MIDDLEWARE = [
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
]

# O motor não persiste nada; a sessão fica em cookie assinado.
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'

DATABASES = {}


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF)
# ====================================================================

REST_FRAMEWORK = {
    'COERCE_DECIMAL_TO_STRING': True,
    'UNAUTHENTICATED_USER': None,
}


# ====================================================================
# CONFIGURAÇÕES DA LOJA (Preço PIX, Parcelamento e Aviso de Estoque)
# Valores padrão; as configurações salvas pela loja têm prioridade.
# ====================================================================

VARIANTES_LOJA = {
    'PIX_HABILITADO': config('PIX_HABILITADO', default=False, cast=bool),
    'PIX_DESCONTO_PERCENTUAL': config('PIX_DESCONTO_PERCENTUAL', default=5, cast=int),
    'PARCELAMENTO_HABILITADO': config('PARCELAMENTO_HABILITADO', default=False, cast=bool),
    'MAX_PARCELAS': config('MAX_PARCELAS', default=12, cast=int),
    'AVISO_ESTOQUE_HABILITADO': config('AVISO_ESTOQUE_HABILITADO', default=False, cast=bool),
    'LIMITE_AVISO_ESTOQUE': config('LIMITE_AVISO_ESTOQUE', default=3, cast=int),
}

# Chave da sessão onde o carrinho guarda os itens montados
CARRINHO_SESSION_KEY = config('CARRINHO_SESSION_KEY', default='carrinho_vejoias')


# ====================================================================
# CONFIGURAÇÕES DE LOGGING
# ====================================================================

LOG_LEVEL = config('LOG_LEVEL', default='WARNING')
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'variantes.core': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': LOG_LEVEL,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 1024 * 1024 * 5,  # 5 MB
        'backupCount': 5,
        'formatter': 'verbose',
    }
    LOGGING['loggers']['variantes.core']['handlers'].append('file')
