# variantes/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'variantes.core'
    # Define o label curto para referência (ex: no shell)
    label = 'core'
    verbose_name = 'Motor de Variantes e Precificação (Core)'

    # A camada Core não tem modelos de banco de dados.
    default_auto_field = 'django.db.models.BigAutoField'
