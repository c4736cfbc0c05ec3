import unittest
from decimal import Decimal

# Importamos as classes que queremos testar
from variantes.core.entities import ConfiguracaoLoja, DetalheVariante, ItemLinha
from variantes.core.exceptions import DadosInvalidosError
from variantes.infrastructure.mappers import (
    ConfiguracaoLojaMapper,
    ItemLinhaMapper,
    OpcaoVarianteMapper,
    ValoresBaseMapper,
)


class OpcaoVarianteMapperTestCase(unittest.TestCase):

    def test_converte_linha_do_catalogo(self):
        """
        Cenário: Linha de product_variants completa vira uma OpcaoVariante.
        """
        opcao = OpcaoVarianteMapper.to_entity({
            'id': 'abc', 'name': 'Dourado', 'price': '10.5', 'stock': 7,
            'attribute_group': ' Cor ', 'color_hex': '#D4A017',
        })

        self.assertEqual(opcao.id, 'abc')
        self.assertEqual(opcao.nome, 'Dourado')
        self.assertEqual(opcao.preco, Decimal('10.5'))
        self.assertEqual(opcao.estoque, 7)
        self.assertEqual(opcao.grupo, 'Cor')
        self.assertEqual(opcao.cor_hex, '#D4A017')

    def test_campos_ausentes_viram_none(self):
        opcao = OpcaoVarianteMapper.to_entity({
            'id': 1, 'name': 'Azul', 'price': None, 'stock': None, 'attribute_group': '', 'color_hex': None,
        })

        self.assertEqual(opcao.id, '1')
        self.assertIsNone(opcao.preco)
        self.assertEqual(opcao.estoque, 0)
        self.assertIsNone(opcao.grupo)
        self.assertFalse(opcao.tem_grupo)

    def test_linha_invalida_falha(self):
        """
        Cenário: Linhas sem id, com preço inválido ou estoque negativo são recusadas.
        """
        with self.assertRaises(DadosInvalidosError):
            OpcaoVarianteMapper.to_entity({'name': 'Sem id', 'stock': 1})
        with self.assertRaises(DadosInvalidosError):
            OpcaoVarianteMapper.to_entity({'id': '1', 'name': 'X', 'price': 'abc'})
        with self.assertRaises(DadosInvalidosError):
            OpcaoVarianteMapper.to_entity({'id': '1', 'name': 'X', 'stock': -1})

    def test_lista_nula_vira_lista_vazia(self):
        self.assertEqual(OpcaoVarianteMapper.to_entities(None), [])


class ValoresBaseMapperTestCase(unittest.TestCase):

    def test_converte_linha_do_produto(self):
        base = ValoresBaseMapper.to_entity({'id': 'p1', 'price': 100, 'compare_at_price': None, 'stock': 5})

        self.assertEqual(base.produto_id, 'p1')
        self.assertEqual(base.preco, Decimal('100'))
        self.assertIsNone(base.preco_comparacao)
        self.assertEqual(base.estoque, 5)

    def test_preco_e_obrigatorio(self):
        with self.assertRaises(DadosInvalidosError):
            ValoresBaseMapper.to_entity({'id': 'p1', 'stock': 5})

    def test_estoque_negativo_do_produto_e_recusado(self):
        with self.assertRaises(DadosInvalidosError):
            ValoresBaseMapper.to_entity({'id': 'p1', 'price': 100, 'stock': -2})


class ConfiguracaoLojaMapperTestCase(unittest.TestCase):

    def test_ajustes_da_loja_em_texto(self):
        configuracao = ConfiguracaoLojaMapper.to_entity({
            'pix_enabled': 'true',
            'pix_discount_percent': '10',
            'installments_enabled': 'false',
            'stock_warning_enabled': 'true',
        })

        self.assertTrue(configuracao.pix_habilitado)
        self.assertEqual(configuracao.pix_desconto_percentual, 10)
        self.assertFalse(configuracao.parcelamento_habilitado)
        self.assertEqual(configuracao.max_parcelas, 12)
        self.assertTrue(configuracao.aviso_estoque_habilitado)
        self.assertEqual(configuracao.limite_aviso_estoque, 3)

    def test_ajustes_ausentes_mantem_padrao(self):
        padrao = ConfiguracaoLoja(pix_habilitado=True, pix_desconto_percentual=7, max_parcelas=6)
        configuracao = ConfiguracaoLojaMapper.to_entity({'max_installments': ''}, padrao=padrao)
        self.assertEqual(configuracao, padrao)

    def test_from_settings(self):
        configuracao = ConfiguracaoLojaMapper.from_settings({
            'PIX_HABILITADO': True, 'PIX_DESCONTO_PERCENTUAL': 5,
            'PARCELAMENTO_HABILITADO': True, 'MAX_PARCELAS': 10,
        })
        self.assertTrue(configuracao.pix_habilitado)
        self.assertEqual(configuracao.max_parcelas, 10)
        self.assertFalse(configuracao.aviso_estoque_habilitado)


class ItemLinhaMapperTestCase(unittest.TestCase):

    def test_item_agrupado_leva_variants_detail(self):
        item = ItemLinha(
            produto_id='anel-1',
            variante_id='v-dourado',
            quantidade=2,
            preco_unitario=Decimal('90.00'),
            detalhes_variantes=(
                DetalheVariante(grupo='Tamanho', nome='P', preco=Decimal('80.00'), variante_id='v-p'),
                DetalheVariante(grupo='Cor', nome='Dourado', preco=None, variante_id='v-dourado', cor_hex='#D4A017'),
            ),
        )

        linha = ItemLinhaMapper.to_row(item)

        self.assertEqual(linha['product_id'], 'anel-1')
        self.assertEqual(linha['variant_id'], 'v-dourado')
        self.assertEqual(linha['quantity'], 2)
        self.assertEqual(linha['unit_price'], '90.00')
        self.assertEqual(linha['metadata_json']['variants_detail'], [
            {'group': 'Tamanho', 'name': 'P', 'price': '80.00', 'variant_id': 'v-p', 'color_hex': None},
            {'group': 'Cor', 'name': 'Dourado', 'price': None, 'variant_id': 'v-dourado', 'color_hex': '#D4A017'},
        ])

    def test_precos_ficam_em_texto_sem_perder_centavos(self):
        item = ItemLinha(produto_id='p1', variante_id=None, quantidade=1, preco_unitario=Decimal('0.1') + Decimal('0.2'))
        self.assertEqual(ItemLinhaMapper.to_row(item)['unit_price'], '0.30')

        item = ItemLinha(produto_id='p1', variante_id=None, quantidade=1, preco_unitario=Decimal('19.999'))
        self.assertEqual(ItemLinhaMapper.to_row(item)['unit_price'], '20.00')

    def test_item_sem_grupos_tem_metadata_vazio(self):
        item = ItemLinha(produto_id='p1', variante_id=None, quantidade=1, preco_unitario=Decimal('100'))
        self.assertEqual(ItemLinhaMapper.to_row(item)['metadata_json'], {})


if __name__ == '__main__':
    unittest.main()
