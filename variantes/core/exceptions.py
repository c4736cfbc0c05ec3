from typing import List, Optional


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE SELEÇÃO DE VARIANTES
# ===============================================

class SelecaoIncompletaError(BaseErroCore):
    """Erro levantado ao montar o item sem escolher uma opção em todos os grupos."""
    def __init__(self, grupos_pendentes: List[str], message: Optional[str] = None):
        self.grupos_pendentes = list(grupos_pendentes)
        if message is None:
            message = (f"Selecione {len(self.grupos_pendentes)} opção(ões) restante(s): "
                       f"{', '.join(self.grupos_pendentes)}")
        self.message = message
        super().__init__(self.message)

class EstoqueInsuficienteError(BaseErroCore):
    """Erro levantado quando a combinação escolhida não tem estoque."""
    def __init__(self, produto_id: str, estoque_atual: int, variante_id: Optional[str] = None, message=None):
        self.produto_id = produto_id
        self.variante_id = variante_id
        self.estoque_atual = estoque_atual
        if message is None:
            message = (f"Produto {produto_id} indisponível para a combinação escolhida. "
                       f"Disponível: {estoque_atual}.")
        self.message = message
        super().__init__(self.message)
