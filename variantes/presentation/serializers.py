from rest_framework import serializers

from variantes.core.entities import OpcaoVariante, ValoresBaseProduto
from variantes.infrastructure.mappers import OpcaoVarianteMapper, ValoresBaseMapper


# ====================================================================
# SERIALIZERS DE ENTRADA (linhas do catálogo)
# ====================================================================

class OpcaoVarianteSerializer(serializers.Serializer):
    """
    Valida uma linha de product_variants vinda do catálogo.
    """
    id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True, required=False, min_value=0)
    stock = serializers.IntegerField(min_value=0, default=0)
    attribute_group = serializers.CharField(max_length=100, allow_null=True, allow_blank=True, required=False)
    color_hex = serializers.RegexField(
        r'^#[0-9A-Fa-f]{6}$',
        allow_null=True,
        allow_blank=True,
        required=False,
        error_messages={'invalid': "A cor deve estar no formato #RRGGBB."},
    )

    def to_entity(self) -> OpcaoVariante:
        return OpcaoVarianteMapper.to_entity(self.validated_data)


class ProdutoBaseSerializer(serializers.Serializer):
    """Valida os valores base do produto (preço, preço 'de' e estoque)."""
    id = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    compare_at_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, allow_null=True, required=False, min_value=0
    )
    stock = serializers.IntegerField(min_value=0, default=0)
    product_variants = OpcaoVarianteSerializer(many=True, required=False)

    def to_entity(self) -> ValoresBaseProduto:
        return ValoresBaseMapper.to_entity(self.validated_data)

    def to_opcoes(self):
        return OpcaoVarianteMapper.to_entities(self.validated_data.get('product_variants'))


# ====================================================================
# SERIALIZERS DE SAÍDA (para a página do produto)
# ====================================================================

class OpcaoSaidaSerializer(serializers.Serializer):
    id = serializers.CharField()
    nome = serializers.CharField()
    preco = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    estoque = serializers.IntegerField()
    disponivel = serializers.BooleanField()
    cor = serializers.CharField(source='cor_exibicao', allow_null=True)


class GrupoAtributoSerializer(serializers.Serializer):
    rotulo = serializers.CharField()
    opcoes = OpcaoSaidaSerializer(many=True)


class CatalogoSerializer(serializers.Serializer):
    """Catálogo de variantes para renderizar os 'chips' de cada grupo."""
    tem_grupos = serializers.BooleanField()
    grupos = GrupoAtributoSerializer(many=True)
    opcoes = OpcaoSaidaSerializer(many=True)


class EstadoSelecaoSerializer(serializers.Serializer):
    """Snapshot da seleção atual e dos grupos que faltam escolher."""
    atributos = serializers.SerializerMethodField()
    indice_variante = serializers.IntegerField(allow_null=True)
    completa = serializers.SerializerMethodField()
    grupos_pendentes = serializers.SerializerMethodField()

    def get_atributos(self, selecao):
        return {str(indice): nome for indice, nome in sorted(selecao.atributos.items())}

    def get_completa(self, selecao):
        return selecao.esta_completa()

    def get_grupos_pendentes(self, selecao):
        return selecao.grupos_pendentes()


class ResultadoPrecoSerializer(serializers.Serializer):
    preco = serializers.DecimalField(max_digits=10, decimal_places=2)
    preco_comparacao = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    desconto_percentual = serializers.IntegerField()
    estoque = serializers.IntegerField()
    em_estoque = serializers.BooleanField()
    estoque_por_grupo = serializers.ListField(child=serializers.IntegerField())
    preco_pix = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    max_parcelas = serializers.IntegerField(allow_null=True)
    valor_parcela = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    ultimas_unidades = serializers.BooleanField()


# ====================================================================
# SERIALIZERS DO ITEM DO CARRINHO
# ====================================================================

class DetalheVarianteSerializer(serializers.Serializer):
    grupo = serializers.CharField()
    nome = serializers.CharField()
    preco = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    variante_id = serializers.CharField(allow_null=True)
    cor_hex = serializers.CharField(allow_null=True)


class ItemLinhaSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    variante_id = serializers.CharField(allow_null=True)
    quantidade = serializers.IntegerField(min_value=1)
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    detalhes_variantes = DetalheVarianteSerializer(many=True, allow_null=True)
