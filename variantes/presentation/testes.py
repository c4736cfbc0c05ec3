import os
import unittest
from decimal import Decimal
from unittest.mock import Mock

import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'variantes.settings')
django.setup()

from django.test import override_settings  # noqa: E402

from variantes.core.dependency_injection import (  # noqa: E402
    get_adicionar_ao_carrinho_use_case,
    get_configuracao_loja,
)
from variantes.core.entities import DetalheVariante, ItemLinha  # noqa: E402
from variantes.core.selecao import EstadoSelecao  # noqa: E402
from variantes.core.use_cases import MontarCatalogoUseCase, ResolverPrecoUseCase  # noqa: E402
from variantes.presentation.cart_manager import CartManager  # noqa: E402
from variantes.presentation.serializers import (  # noqa: E402
    CatalogoSerializer,
    EstadoSelecaoSerializer,
    ItemLinhaSerializer,
    OpcaoVarianteSerializer,
    ProdutoBaseSerializer,
    ResultadoPrecoSerializer,
)


class SessaoFake(dict):
    """Sessão em memória com o atributo 'modified' da sessão do Django."""
    modified = False


def request_fake():
    request = Mock()
    request.session = SessaoFake()
    return request


PRODUTO_ANEL = {
    'id': 'anel-1',
    'price': '150.00',
    'compare_at_price': '200.00',
    'stock': 9,
    'product_variants': [
        {'id': 'v-p', 'name': 'P', 'price': '80.00', 'stock': 3, 'attribute_group': 'Tamanho', 'color_hex': None},
        {'id': 'v-m', 'name': 'M', 'price': '90.00', 'stock': 0, 'attribute_group': 'Tamanho', 'color_hex': None},
        {'id': 'v-dourado', 'name': 'Dourado', 'price': '10.00', 'stock': 7, 'attribute_group': 'Cor', 'color_hex': ''},
    ],
}


class SerializersEntradaTestCase(unittest.TestCase):

    def test_produto_valido_vira_entidades(self):
        """
        Cenário: Produto com variantes vindo do catálogo é validado e convertido.
        """
        serializer = ProdutoBaseSerializer(data=PRODUTO_ANEL)
        self.assertTrue(serializer.is_valid(), serializer.errors)

        base = serializer.to_entity()
        opcoes = serializer.to_opcoes()

        self.assertEqual(base.produto_id, 'anel-1')
        self.assertEqual(base.preco, Decimal('150.00'))
        self.assertEqual(base.preco_comparacao, Decimal('200.00'))
        self.assertEqual([opcao.grupo for opcao in opcoes], ['Tamanho', 'Tamanho', 'Cor'])
        self.assertIsNone(opcoes[2].cor_hex)

    def test_variante_com_estoque_negativo_e_recusada(self):
        serializer = OpcaoVarianteSerializer(data={'id': '1', 'name': 'Azul', 'stock': -1})
        self.assertFalse(serializer.is_valid())
        self.assertIn('stock', serializer.errors)

    def test_cor_fora_do_formato_e_recusada(self):
        serializer = OpcaoVarianteSerializer(data={'id': '1', 'name': 'Azul', 'stock': 1, 'color_hex': 'azul'})
        self.assertFalse(serializer.is_valid())
        self.assertIn('color_hex', serializer.errors)

    def test_variante_sem_preco(self):
        serializer = OpcaoVarianteSerializer(data={'id': '1', 'name': 'Azul', 'price': None, 'stock': 2})
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertIsNone(serializer.to_entity().preco)


class SerializersSaidaTestCase(unittest.TestCase):

    def setUp(self):
        serializer = ProdutoBaseSerializer(data=PRODUTO_ANEL)
        serializer.is_valid(raise_exception=True)
        self.base = serializer.to_entity()
        self.catalogo = MontarCatalogoUseCase().executar(serializer.to_opcoes())
        self.selecao = EstadoSelecao(self.catalogo)

    def test_catalogo_para_os_chips(self):
        dados = CatalogoSerializer(self.catalogo).data

        self.assertTrue(dados['tem_grupos'])
        self.assertEqual([grupo['rotulo'] for grupo in dados['grupos']], ['Tamanho', 'Cor'])
        dourado = dados['grupos'][1]['opcoes'][0]
        self.assertEqual(dourado['cor'], '#D4A017')
        self.assertEqual(dourado['preco'], '10.00')
        self.assertFalse(dados['grupos'][0]['opcoes'][1]['disponivel'])

    def test_estado_da_selecao(self):
        self.selecao.alternar(0, 'P')
        dados = EstadoSelecaoSerializer(self.selecao).data

        self.assertEqual(dados['atributos'], {'0': 'P'})
        self.assertFalse(dados['completa'])
        self.assertEqual(dados['grupos_pendentes'], ['Cor'])
        self.assertIsNone(dados['indice_variante'])

    def test_resultado_do_preco(self):
        self.selecao.alternar(0, 'P')
        self.selecao.alternar(1, 'Dourado')
        resultado = ResolverPrecoUseCase().executar(self.catalogo, self.selecao, self.base)

        dados = ResultadoPrecoSerializer(resultado).data

        self.assertEqual(dados['preco'], '90.00')
        self.assertEqual(dados['preco_comparacao'], '200.00')
        self.assertEqual(dados['desconto_percentual'], 55)
        self.assertEqual(dados['estoque'], 3)
        self.assertTrue(dados['em_estoque'])
        self.assertEqual(dados['estoque_por_grupo'], [3, 7])
        self.assertIsNone(dados['preco_pix'])

    def test_item_linha(self):
        item = ItemLinha(
            produto_id='anel-1', variante_id='v-p', quantidade=3, preco_unitario=Decimal('80'),
            detalhes_variantes=(DetalheVariante(grupo='Tamanho', nome='P', preco=Decimal('80'), variante_id='v-p'),),
        )
        dados = ItemLinhaSerializer(item).data

        self.assertEqual(dados['subtotal'], '240.00')
        self.assertEqual(dados['detalhes_variantes'][0]['grupo'], 'Tamanho')

        dados_sem_grupo = ItemLinhaSerializer(
            ItemLinha(produto_id='p', variante_id=None, quantidade=1, preco_unitario=Decimal('10'))
        ).data
        self.assertIsNone(dados_sem_grupo['detalhes_variantes'])


class CartManagerTestCase(unittest.TestCase):

    def setUp(self):
        self.request = request_fake()
        self.cart_manager = CartManager(self.request)

    def test_itens_sem_grupo_somam_quantidade(self):
        """
        Cenário: Mesmo produto e mesma variante sem grupos viram uma única linha.
        """
        item = ItemLinha(produto_id='p1', variante_id='v1', quantidade=1, preco_unitario=Decimal('50'))

        self.cart_manager.adicionar_item_linha(item)
        self.cart_manager.adicionar_item_linha(item)

        self.assertEqual(len(self.cart_manager.get_itens()), 1)
        self.assertEqual(self.cart_manager.get_total_items(), 2)
        self.assertTrue(self.request.session.modified)

    def test_itens_com_grupos_sempre_viram_nova_linha(self):
        item = ItemLinha(
            produto_id='p1', variante_id='v1', quantidade=1, preco_unitario=Decimal('50'),
            detalhes_variantes=(DetalheVariante(grupo='Cor', nome='Prata', preco=None, variante_id='v1'),),
        )

        self.cart_manager.adicionar_item_linha(item)
        self.cart_manager.adicionar_item_linha(item)

        self.assertEqual(len(self.cart_manager.get_itens()), 2)

    def test_carrinho_persiste_na_sessao(self):
        self.cart_manager.adicionar_item_linha(
            ItemLinha(produto_id='p1', variante_id=None, quantidade=2, preco_unitario=Decimal('50'))
        )

        outro_manager = CartManager(self.request)
        self.assertEqual(outro_manager.get_total_items(), 2)

        outro_manager.remove_item(0)
        self.assertTrue(outro_manager.is_empty())

        outro_manager.adicionar_item_linha(
            ItemLinha(produto_id='p2', variante_id=None, quantidade=1, preco_unitario=Decimal('10'))
        )
        outro_manager.clear_carrinho()
        self.assertTrue(CartManager(self.request).is_empty())


class DependencyInjectionTestCase(unittest.TestCase):

    @override_settings(VARIANTES_LOJA={'PIX_HABILITADO': True, 'PIX_DESCONTO_PERCENTUAL': 5, 'MAX_PARCELAS': 12})
    def test_configuracao_das_settings_com_ajustes_da_loja(self):
        self.assertTrue(get_configuracao_loja().pix_habilitado)

        configuracao = get_configuracao_loja({'pix_enabled': 'false', 'installments_enabled': 'true'})
        self.assertFalse(configuracao.pix_habilitado)
        self.assertTrue(configuracao.parcelamento_habilitado)
        self.assertEqual(configuracao.max_parcelas, 12)

    @override_settings(VARIANTES_LOJA={'PIX_HABILITADO': True, 'PIX_DESCONTO_PERCENTUAL': 10})
    def test_fluxo_completo_ate_o_carrinho_da_sessao(self):
        """
        Cenário: Cliente escolhe Tamanho e Cor e adiciona ao carrinho da sessão.
        """
        serializer = ProdutoBaseSerializer(data=PRODUTO_ANEL)
        serializer.is_valid(raise_exception=True)
        catalogo = MontarCatalogoUseCase().executar(serializer.to_opcoes())
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(0, 'P')
        selecao.alternar(1, 'Dourado')

        cart_manager = CartManager(request_fake())
        use_case = get_adicionar_ao_carrinho_use_case(cart_manager)
        item = use_case.executar(selecao, serializer.to_entity(), quantidade=2)

        self.assertEqual(use_case.configuracao.pix_desconto_percentual, 10)
        self.assertEqual(item.variante_id, 'v-dourado')
        linha = cart_manager.get_itens()[0]
        self.assertEqual(linha['quantity'], 2)
        self.assertEqual(len(linha['metadata_json']['variants_detail']), 2)


if __name__ == '__main__':
    unittest.main()
