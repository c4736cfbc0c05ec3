from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from variantes.core.cores import cor_do_metal

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros do motor de variantes.
# ====================================================================

ROTULO_SEM_GRUPO = "Variante"


@dataclass(frozen=True)
class OpcaoVariante:
    """Uma opção comprável de um produto (ex: Tamanho P, Cor Dourado)."""
    id: str
    nome: str
    estoque: int = 0
    preco: Optional[Decimal] = None  # None = usa o preço base do produto
    grupo: Optional[str] = None
    cor_hex: Optional[str] = None

    @property
    def tem_grupo(self) -> bool:
        return bool(self.grupo)

    @property
    def disponivel(self) -> bool:
        return self.estoque > 0

    @property
    def cor_exibicao(self) -> Optional[str]:
        """Cor para o 'chip' da opção: a cor cadastrada ou a cor do metal pelo nome."""
        return self.cor_hex or cor_do_metal(self.nome)


@dataclass(frozen=True)
class GrupoAtributo:
    """Eixo de variação (ex: 'Tamanho') com suas opções mutuamente exclusivas."""
    rotulo: str
    opcoes: Tuple[OpcaoVariante, ...] = ()

    def buscar_opcao(self, nome: Optional[str]) -> Optional[OpcaoVariante]:
        return next((opcao for opcao in self.opcoes if opcao.nome == nome), None)


@dataclass(frozen=True)
class CatalogoVariantes:
    """Variantes de um produto normalizadas em grupos de atributos."""
    tem_grupos: bool = False
    grupos: Tuple[GrupoAtributo, ...] = ()
    opcoes: Tuple[OpcaoVariante, ...] = ()

    @property
    def vazio(self) -> bool:
        return not self.opcoes


@dataclass(frozen=True)
class ValoresBaseProduto:
    """Valores do produto usados quando nenhuma variante os sobrescreve."""
    produto_id: str
    preco: Decimal
    estoque: int = 0
    preco_comparacao: Optional[Decimal] = None  # preço "de" (riscado)


@dataclass(frozen=True)
class ConfiguracaoLoja:
    """
    Configurações da loja que afetam a exibição do preço.
    Passadas explicitamente ao resolvedor de preço (nada de estado global).
    """
    pix_habilitado: bool = False
    pix_desconto_percentual: int = 0
    parcelamento_habilitado: bool = False
    max_parcelas: int = 1
    aviso_estoque_habilitado: bool = False
    limite_aviso_estoque: int = 0


@dataclass(frozen=True)
class ResultadoPreco:
    """Preço, desconto e estoque calculados para a seleção atual."""
    preco: Decimal
    preco_comparacao: Optional[Decimal]
    desconto_percentual: int
    estoque: int
    em_estoque: bool
    estoque_por_grupo: List[int] = field(default_factory=list)
    preco_pix: Optional[Decimal] = None
    max_parcelas: Optional[int] = None
    valor_parcela: Optional[Decimal] = None
    ultimas_unidades: bool = False


@dataclass(frozen=True)
class DetalheVariante:
    """Snapshot da opção escolhida em um grupo, gravado junto ao item do carrinho."""
    grupo: str
    nome: str
    preco: Optional[Decimal]
    variante_id: Optional[str]
    cor_hex: Optional[str] = None


@dataclass(frozen=True)
class ItemLinha:
    """Item de carrinho/pedido pronto para ser entregue ao carrinho (imutável)."""
    produto_id: str
    variante_id: Optional[str]
    quantidade: int
    preco_unitario: Decimal
    detalhes_variantes: Optional[Tuple[DetalheVariante, ...]] = None

    @property
    def subtotal(self) -> Decimal:
        """Calcula o subtotal do item."""
        return self.preco_unitario * self.quantidade
