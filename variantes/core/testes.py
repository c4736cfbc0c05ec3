# variantes/core/testes.py

import unittest
from unittest.mock import Mock
from decimal import Decimal

from variantes.core.entities import (
    ConfiguracaoLoja, DetalheVariante, OpcaoVariante, ValoresBaseProduto
)
from variantes.core.exceptions import DadosInvalidosError, EstoqueInsuficienteError, SelecaoIncompletaError
from variantes.core.selecao import EstadoSelecao
from variantes.core.use_cases import (
    AdicionarAoCarrinhoUseCase,
    MontarCatalogoUseCase,
    MontarItemLinhaUseCase,
    ResolverPrecoUseCase,
    calcular_desconto_percentual,
)

# ====================================================================
# CONFIGURAÇÃO DE FIXTURES (Dados Mock)
# ====================================================================

def opcoes_anel():
    """Anel com grupos Tamanho e Cor."""
    return [
        OpcaoVariante(id='v-p', nome='P', estoque=3, preco=Decimal('80.00'), grupo='Tamanho'),
        OpcaoVariante(id='v-m', nome='M', estoque=0, preco=Decimal('90.00'), grupo='Tamanho'),
        OpcaoVariante(id='v-dourado', nome='Dourado', estoque=7, preco=Decimal('10.00'), grupo='Cor'),
    ]

base_anel = ValoresBaseProduto(produto_id='anel-1', preco=Decimal('150.00'), estoque=9)
base_simples = ValoresBaseProduto(produto_id='brinco-1', preco=Decimal('100.00'), estoque=5)


# ====================================================================
# TESTES DO CATÁLOGO
# ====================================================================

class TestMontarCatalogo(unittest.TestCase):

    def setUp(self):
        self.use_case = MontarCatalogoUseCase()

    def test_lista_vazia_nao_tem_grupos(self):
        catalogo = self.use_case.executar([])
        self.assertFalse(catalogo.tem_grupos)
        self.assertEqual(catalogo.grupos, ())
        self.assertTrue(catalogo.vazio)

    def test_variantes_sem_grupo_ficam_na_lista_plana(self):
        opcoes = [OpcaoVariante(id='1', nome='Azul', estoque=0), OpcaoVariante(id='2', nome='Verde', estoque=4, grupo='')]
        catalogo = self.use_case.executar(opcoes)

        self.assertFalse(catalogo.tem_grupos)
        self.assertEqual(catalogo.grupos, ())
        self.assertEqual([o.nome for o in catalogo.opcoes], ['Azul', 'Verde'])

    def test_agrupa_na_ordem_em_que_aparecem(self):
        opcoes = [
            OpcaoVariante(id='1', nome='Dourado', estoque=1, grupo='Cor'),
            OpcaoVariante(id='2', nome='P', estoque=1, grupo='Tamanho'),
            OpcaoVariante(id='3', nome='Prata', estoque=1, grupo='Cor'),
            OpcaoVariante(id='4', nome='G', estoque=1, grupo='Tamanho'),
        ]
        catalogo = self.use_case.executar(opcoes)

        self.assertTrue(catalogo.tem_grupos)
        self.assertEqual([g.rotulo for g in catalogo.grupos], ['Cor', 'Tamanho'])
        self.assertEqual([o.nome for o in catalogo.grupos[0].opcoes], ['Dourado', 'Prata'])
        self.assertEqual([o.nome for o in catalogo.grupos[1].opcoes], ['P', 'G'])

    def test_variantes_sem_grupo_vao_para_grupo_final(self):
        opcoes = [
            OpcaoVariante(id='1', nome='Avulsa', estoque=1),
            OpcaoVariante(id='2', nome='P', estoque=1, grupo='Tamanho'),
            OpcaoVariante(id='3', nome='Outra', estoque=1),
        ]
        catalogo = self.use_case.executar(opcoes)

        self.assertEqual([g.rotulo for g in catalogo.grupos], ['Tamanho', 'Variante'])
        self.assertEqual([o.nome for o in catalogo.grupos[-1].opcoes], ['Avulsa', 'Outra'])

    def test_cor_exibicao_usa_cor_do_metal(self):
        self.assertEqual(OpcaoVariante(id='1', nome=' Dourado ').cor_exibicao, '#D4A017')
        self.assertEqual(OpcaoVariante(id='2', nome='Dourado', cor_hex='#000000').cor_exibicao, '#000000')
        self.assertIsNone(OpcaoVariante(id='3', nome='Azul').cor_exibicao)


# ====================================================================
# TESTES DO ESTADO DA SELEÇÃO
# ====================================================================

class TestEstadoSelecao(unittest.TestCase):

    def setUp(self):
        self.catalogo = MontarCatalogoUseCase().executar(opcoes_anel())
        self.selecao = EstadoSelecao(self.catalogo)

    def test_alternar_mesma_opcao_duas_vezes_volta_ao_estado_anterior(self):
        self.assertTrue(self.selecao.alternar(0, 'P'))
        self.assertEqual(self.selecao.selecionado(0), 'P')

        self.assertTrue(self.selecao.alternar(0, 'P'))
        self.assertIsNone(self.selecao.selecionado(0))
        self.assertEqual(self.selecao.atributos, {})

    def test_alternar_outra_opcao_substitui(self):
        catalogo = MontarCatalogoUseCase().executar([
            OpcaoVariante(id='a', nome='P', estoque=1, grupo='Tamanho'),
            OpcaoVariante(id='b', nome='G', estoque=1, grupo='Tamanho'),
        ])
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(0, 'P')
        selecao.alternar(0, 'G')
        self.assertEqual(selecao.atributos, {0: 'G'})

    def test_opcao_sem_estoque_nao_e_selecionada(self):
        self.assertFalse(self.selecao.alternar(0, 'M'))
        self.assertEqual(self.selecao.atributos, {})

    def test_grupo_ou_opcao_inexistente_e_ignorado(self):
        self.assertFalse(self.selecao.alternar(5, 'P'))
        self.assertFalse(self.selecao.alternar(0, 'GG'))
        self.assertEqual(self.selecao.atributos, {})

    def test_completa_somente_com_todos_os_grupos(self):
        self.assertFalse(self.selecao.esta_completa())
        self.selecao.alternar(1, 'Dourado')
        self.assertFalse(self.selecao.esta_completa())
        self.assertEqual(self.selecao.grupos_pendentes(), ['Tamanho'])

        self.selecao.alternar(0, 'P')
        self.assertTrue(self.selecao.esta_completa())
        self.assertEqual(self.selecao.grupos_pendentes(), [])

    def test_produto_sem_grupos_sempre_completo(self):
        catalogo = MontarCatalogoUseCase().executar([OpcaoVariante(id='1', nome='Azul', estoque=0)])
        self.assertTrue(EstadoSelecao(catalogo).esta_completa())

    def test_alternar_variante_plana(self):
        catalogo = MontarCatalogoUseCase().executar([
            OpcaoVariante(id='1', nome='Azul', estoque=0),
            OpcaoVariante(id='2', nome='Verde', estoque=4),
        ])
        selecao = EstadoSelecao(catalogo)

        self.assertTrue(selecao.alternar_variante(0))
        self.assertEqual(selecao.variante_plana().nome, 'Azul')
        self.assertTrue(selecao.alternar_variante(0))
        self.assertIsNone(selecao.variante_plana())
        self.assertFalse(selecao.alternar_variante(2))

    def test_redefinir_descarta_entradas_obsoletas(self):
        self.selecao.alternar(0, 'P')
        self.selecao.alternar(1, 'Dourado')

        novo_catalogo = MontarCatalogoUseCase().executar([
            OpcaoVariante(id='x', nome='P', estoque=1, grupo='Tamanho'),
        ])
        self.selecao.redefinir(novo_catalogo)

        self.assertEqual(self.selecao.atributos, {0: 'P'})
        self.assertTrue(self.selecao.esta_completa())

    def test_redefinir_para_produto_sem_grupos_limpa_tudo(self):
        self.selecao.alternar(0, 'P')
        self.selecao.redefinir(MontarCatalogoUseCase().executar([]))
        self.assertEqual(self.selecao.atributos, {})
        self.assertIsNone(self.selecao.indice_variante)

    def test_redefinir_descarta_indice_plano_fora_da_lista(self):
        montar = MontarCatalogoUseCase()
        selecao = EstadoSelecao(montar.executar([
            OpcaoVariante(id='1', nome='Azul', estoque=1),
            OpcaoVariante(id='2', nome='Verde', estoque=1),
            OpcaoVariante(id='3', nome='Rosa', estoque=1),
        ]))
        selecao.alternar_variante(2)

        selecao.redefinir(montar.executar([
            OpcaoVariante(id='4', nome='Preto', estoque=1),
            OpcaoVariante(id='5', nome='Branco', estoque=1),
            OpcaoVariante(id='6', nome='Cinza', estoque=1),
        ]))
        self.assertEqual(selecao.indice_variante, 2)

        selecao.redefinir(montar.executar([
            OpcaoVariante(id='1', nome='Azul', estoque=1),
            OpcaoVariante(id='2', nome='Verde', estoque=1),
        ]))
        self.assertIsNone(selecao.indice_variante)
        self.assertIsNone(selecao.variante_plana())

    def test_consulta_contra_outro_catalogo(self):
        """
        Cenário: Seleção {Tamanho: P} ainda presa ao catálogo antigo,
        consultada contra o catálogo novo que ganhou o grupo Cor.
        """
        antigo = MontarCatalogoUseCase().executar([
            OpcaoVariante(id='v-p', nome='P', estoque=3, grupo='Tamanho'),
        ])
        selecao = EstadoSelecao(antigo)
        selecao.alternar(0, 'P')

        self.assertTrue(selecao.esta_completa())
        self.assertFalse(selecao.esta_completa(self.catalogo))
        self.assertEqual(selecao.grupos_pendentes(self.catalogo), ['Cor'])
        self.assertEqual([opcao.id for _, opcao in selecao.opcoes_selecionadas(self.catalogo)], ['v-p'])


# ====================================================================
# TESTES DO RESOLVEDOR DE PREÇO
# ====================================================================

class TestResolverPreco(unittest.TestCase):

    def setUp(self):
        self.use_case = ResolverPrecoUseCase()
        self.montar_catalogo = MontarCatalogoUseCase()

    def test_produto_sem_variantes_usa_valores_base(self):
        """
        Cenário: Produto sem variantes, preço base 100 e estoque 5.
        """
        catalogo = self.montar_catalogo.executar([])
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base_simples)

        self.assertEqual(resultado.preco, Decimal('100.00'))
        self.assertEqual(resultado.estoque, 5)
        self.assertTrue(resultado.em_estoque)
        self.assertEqual(resultado.desconto_percentual, 0)
        self.assertEqual(resultado.estoque_por_grupo, [])

    def test_agrupado_sem_selecao_usa_valores_base(self):
        catalogo = self.montar_catalogo.executar(opcoes_anel())
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base_anel)

        self.assertEqual(resultado.preco, Decimal('150.00'))
        self.assertEqual(resultado.estoque, 9)
        self.assertTrue(resultado.em_estoque)
        self.assertEqual(resultado.estoque_por_grupo, [0, 0])

    def test_agrupado_soma_precos_e_usa_menor_estoque(self):
        catalogo = self.montar_catalogo.executar(opcoes_anel())
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(0, 'P')
        selecao.alternar(1, 'Dourado')

        resultado = self.use_case.executar(catalogo, selecao, base_anel)

        self.assertEqual(resultado.preco, Decimal('90.00'))
        self.assertEqual(resultado.estoque, 3)
        self.assertTrue(resultado.em_estoque)
        self.assertEqual(resultado.estoque_por_grupo, [3, 7])

    def test_estoque_ignora_grupos_nao_selecionados(self):
        catalogo = self.montar_catalogo.executar(opcoes_anel())
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(1, 'Dourado')

        resultado = self.use_case.executar(catalogo, selecao, base_anel)

        self.assertEqual(resultado.preco, Decimal('10.00'))
        self.assertEqual(resultado.estoque, 7)
        self.assertEqual(resultado.estoque_por_grupo, [0, 7])

    def test_opcao_que_ficou_sem_estoque_deixa_indisponivel(self):
        """
        Cenário: Tamanho M e Cor Dourado escolhidos, mas M ficou sem estoque.
        O preço continua somando as opções e o produto fica indisponível.
        """
        # M tinha estoque quando foi escolhido e zerou depois
        opcoes = opcoes_anel()
        opcoes[1] = OpcaoVariante(id='v-m', nome='M', estoque=2, preco=Decimal('90.00'), grupo='Tamanho')
        catalogo = self.montar_catalogo.executar(opcoes)
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(0, 'M')
        selecao.alternar(1, 'Dourado')

        catalogo_atualizado = self.montar_catalogo.executar(opcoes_anel())
        selecao.redefinir(catalogo_atualizado)
        resultado = self.use_case.executar(catalogo_atualizado, selecao, base_anel)

        self.assertEqual(resultado.preco, Decimal('100.00'))
        self.assertEqual(resultado.estoque, 0)
        self.assertFalse(resultado.em_estoque)

    def test_soma_zero_volta_ao_preco_base(self):
        catalogo = self.montar_catalogo.executar([OpcaoVariante(id='1', nome='P', estoque=2, grupo='Tamanho')])
        selecao = EstadoSelecao(catalogo)
        selecao.alternar(0, 'P')

        resultado = self.use_case.executar(catalogo, selecao, base_anel)
        self.assertEqual(resultado.preco, Decimal('150.00'))
        self.assertEqual(resultado.estoque, 2)

    def test_plano_com_e_sem_selecao(self):
        """
        Cenário: Variantes Azul (sem estoque) e Verde, sem grupos.
        """
        catalogo = self.montar_catalogo.executar([
            OpcaoVariante(id='1', nome='Azul', estoque=0),
            OpcaoVariante(id='2', nome='Verde', estoque=4, preco=Decimal('120.00')),
        ])
        selecao = EstadoSelecao(catalogo)

        resultado = self.use_case.executar(catalogo, selecao, base_simples)
        self.assertEqual((resultado.preco, resultado.estoque, resultado.em_estoque), (Decimal('100.00'), 5, True))

        selecao.alternar_variante(0)
        resultado = self.use_case.executar(catalogo, selecao, base_simples)
        self.assertEqual(resultado.preco, Decimal('100.00'))
        self.assertEqual(resultado.estoque, 0)
        self.assertFalse(resultado.em_estoque)

        selecao.alternar_variante(0)
        resultado = self.use_case.executar(catalogo, selecao, base_simples)
        self.assertEqual((resultado.preco, resultado.estoque, resultado.em_estoque), (Decimal('100.00'), 5, True))

        selecao.alternar_variante(1)
        resultado = self.use_case.executar(catalogo, selecao, base_simples)
        self.assertEqual(resultado.preco, Decimal('120.00'))

    def test_desconto_sobre_preco_comparacao(self):
        base = ValoresBaseProduto(produto_id='p', preco=Decimal('75.00'), estoque=1, preco_comparacao=Decimal('100.00'))
        catalogo = self.montar_catalogo.executar([])
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base)

        self.assertEqual(resultado.desconto_percentual, 25)
        self.assertEqual(resultado.preco_comparacao, Decimal('100.00'))

    def test_desconto_fica_entre_0_e_100(self):
        casos = [
            (Decimal('0'), Decimal('100')),
            (Decimal('100'), Decimal('0')),
            (Decimal('150'), Decimal('100')),
            (Decimal('0'), Decimal('0')),
            (Decimal('99.50'), Decimal('100')),
            (Decimal('10'), None),
        ]
        for preco, comparacao in casos:
            with self.subTest(preco=preco, comparacao=comparacao):
                desconto = calcular_desconto_percentual(preco, comparacao)
                self.assertGreaterEqual(desconto, 0)
                self.assertLessEqual(desconto, 100)

        self.assertEqual(calcular_desconto_percentual(Decimal('0'), Decimal('100')), 100)
        # Arredonda para cima no meio, como na vitrine
        self.assertEqual(calcular_desconto_percentual(Decimal('99.50'), Decimal('100')), 1)

    def test_configuracao_da_loja(self):
        configuracao = ConfiguracaoLoja(
            pix_habilitado=True, pix_desconto_percentual=5,
            parcelamento_habilitado=True, max_parcelas=12,
            aviso_estoque_habilitado=True, limite_aviso_estoque=3,
        )
        base = ValoresBaseProduto(produto_id='p', preco=Decimal('120.00'), estoque=2)
        catalogo = self.montar_catalogo.executar([])

        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base, configuracao)

        self.assertEqual(resultado.preco_pix, Decimal('114.00'))
        self.assertEqual(resultado.max_parcelas, 12)
        self.assertEqual(resultado.valor_parcela, Decimal('10.00'))
        self.assertTrue(resultado.ultimas_unidades)

    def test_agrupado_sem_selecao_e_sem_estoque_base(self):
        catalogo = self.montar_catalogo.executar(opcoes_anel())
        base = ValoresBaseProduto(produto_id='anel-1', preco=Decimal('150.00'), estoque=0)

        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base)

        self.assertEqual(resultado.estoque, 0)
        self.assertFalse(resultado.em_estoque)

    def test_ultimas_unidades_somente_com_estoque_baixo(self):
        configuracao = ConfiguracaoLoja(aviso_estoque_habilitado=True, limite_aviso_estoque=3)
        catalogo = self.montar_catalogo.executar([])
        casos = [(0, False), (3, True), (4, False)]

        for estoque, esperado in casos:
            with self.subTest(estoque=estoque):
                base = ValoresBaseProduto(produto_id='p', preco=Decimal('50.00'), estoque=estoque)
                resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base, configuracao)
                self.assertEqual(resultado.ultimas_unidades, esperado)

    def test_pix_e_parcela_arredondam_meio_centavo_para_cima(self):
        catalogo = self.montar_catalogo.executar([])

        configuracao = ConfiguracaoLoja(pix_habilitado=True, pix_desconto_percentual=5)
        base = ValoresBaseProduto(produto_id='p', preco=Decimal('10.30'), estoque=1)
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base, configuracao)
        # 10.30 * 0.95 = 9.785
        self.assertEqual(resultado.preco_pix, Decimal('9.79'))

        configuracao = ConfiguracaoLoja(parcelamento_habilitado=True, max_parcelas=4)
        base = ValoresBaseProduto(produto_id='p', preco=Decimal('100.10'), estoque=1)
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base, configuracao)
        # 100.10 / 4 = 25.025
        self.assertEqual(resultado.valor_parcela, Decimal('25.03'))

    def test_desconto_pix_acima_de_100_nao_deixa_preco_negativo(self):
        configuracao = ConfiguracaoLoja(pix_habilitado=True, pix_desconto_percentual=150)
        catalogo = self.montar_catalogo.executar([])

        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base_simples, configuracao)

        self.assertEqual(resultado.preco_pix, Decimal('0.00'))

    def test_sem_configuracao_nao_calcula_extras(self):
        catalogo = self.montar_catalogo.executar([])
        resultado = self.use_case.executar(catalogo, EstadoSelecao(catalogo), base_simples)

        self.assertIsNone(resultado.preco_pix)
        self.assertIsNone(resultado.max_parcelas)
        self.assertIsNone(resultado.valor_parcela)
        self.assertFalse(resultado.ultimas_unidades)


# ====================================================================
# TESTES DA MONTAGEM DO ITEM
# ====================================================================

class TestMontarItemLinha(unittest.TestCase):

    def setUp(self):
        self.use_case = MontarItemLinhaUseCase()
        self.resolver = ResolverPrecoUseCase()
        self.catalogo = MontarCatalogoUseCase().executar(opcoes_anel())
        self.selecao = EstadoSelecao(self.catalogo)

    def montar(self, quantidade=1, base=base_anel):
        resultado = self.resolver.executar(self.selecao.catalogo, self.selecao, base)
        return self.use_case.executar(self.selecao.catalogo, self.selecao, resultado, quantidade, base.produto_id)

    def test_selecao_incompleta_falha(self):
        """
        Cenário: Só o Tamanho foi escolhido; a Cor ainda falta.
        """
        self.selecao.alternar(0, 'P')

        with self.assertRaises(SelecaoIncompletaError) as contexto:
            self.montar()

        self.assertEqual(contexto.exception.grupos_pendentes, ['Cor'])
        self.assertEqual(str(contexto.exception), "Selecione 1 opção(ões) restante(s): Cor")

    def test_catalogo_recebido_define_a_completude(self):
        """
        Cenário: A seleção {Tamanho: P} foi feita no catálogo antigo; o catálogo
        recebido tem também o grupo Cor, então nenhum item pode ser montado.
        """
        antigo = MontarCatalogoUseCase().executar([
            OpcaoVariante(id='v-p', nome='P', estoque=3, preco=Decimal('80.00'), grupo='Tamanho'),
        ])
        selecao = EstadoSelecao(antigo)
        selecao.alternar(0, 'P')
        resultado = self.resolver.executar(self.catalogo, selecao, base_anel)

        with self.assertRaises(SelecaoIncompletaError) as contexto:
            self.use_case.executar(self.catalogo, selecao, resultado, 1, base_anel.produto_id)

        self.assertEqual(contexto.exception.grupos_pendentes, ['Cor'])

    def test_item_agrupado_usa_id_do_ultimo_grupo(self):
        # Ordem de clique não importa: o último é o de maior índice
        self.selecao.alternar(1, 'Dourado')
        self.selecao.alternar(0, 'P')

        item = self.montar(quantidade=2)

        self.assertEqual(item.produto_id, 'anel-1')
        self.assertEqual(item.variante_id, 'v-dourado')
        self.assertEqual(item.quantidade, 2)
        self.assertEqual(item.preco_unitario, Decimal('90.00'))
        self.assertEqual(item.subtotal, Decimal('180.00'))
        self.assertEqual(item.detalhes_variantes, (
            DetalheVariante(grupo='Tamanho', nome='P', preco=Decimal('80.00'), variante_id='v-p', cor_hex=None),
            DetalheVariante(grupo='Cor', nome='Dourado', preco=Decimal('10.00'), variante_id='v-dourado', cor_hex=None),
        ))

    def test_item_e_montado_mesmo_sem_estoque(self):
        opcoes = opcoes_anel()
        opcoes[1] = OpcaoVariante(id='v-m', nome='M', estoque=1, preco=Decimal('90.00'), grupo='Tamanho')
        self.selecao = EstadoSelecao(MontarCatalogoUseCase().executar(opcoes))
        self.selecao.alternar(0, 'M')
        self.selecao.alternar(1, 'Dourado')
        self.selecao.redefinir(self.catalogo)

        item = self.montar()

        self.assertEqual(item.preco_unitario, Decimal('100.00'))
        self.assertEqual(item.variante_id, 'v-dourado')

    def test_item_plano_sem_detalhes(self):
        self.selecao = EstadoSelecao(MontarCatalogoUseCase().executar([
            OpcaoVariante(id='1', nome='Azul', estoque=0),
            OpcaoVariante(id='2', nome='Verde', estoque=4),
        ]))
        item = self.montar(base=base_simples)
        self.assertIsNone(item.variante_id)
        self.assertIsNone(item.detalhes_variantes)

        self.selecao.alternar_variante(1)
        item = self.montar(base=base_simples)
        self.assertEqual(item.variante_id, '2')
        self.assertIsNone(item.detalhes_variantes)

    def test_quantidade_invalida_falha(self):
        self.selecao.alternar(0, 'P')
        self.selecao.alternar(1, 'Dourado')
        with self.assertRaises(DadosInvalidosError):
            self.montar(quantidade=0)


# ====================================================================
# TESTES DO CASO DE USO ADICIONAR AO CARRINHO
# ====================================================================

class TestAdicionarAoCarrinho(unittest.TestCase):

    def setUp(self):
        self.carrinho_gateway_mock = Mock()
        self.use_case = AdicionarAoCarrinhoUseCase(carrinho_gateway=self.carrinho_gateway_mock)
        self.catalogo = MontarCatalogoUseCase().executar(opcoes_anel())
        self.selecao = EstadoSelecao(self.catalogo)

    def test_adiciona_item_com_selecao_completa(self):
        self.selecao.alternar(0, 'P')
        self.selecao.alternar(1, 'Dourado')

        item = self.use_case.executar(self.selecao, base_anel, quantidade=1)

        self.carrinho_gateway_mock.adicionar_item_linha.assert_called_once_with(item)
        self.assertEqual(item.preco_unitario, Decimal('90.00'))

    def test_recalcula_preco_depois_de_mudar_a_selecao(self):
        self.selecao.alternar(0, 'P')
        self.selecao.alternar(1, 'Dourado')
        self.use_case.executar(self.selecao, base_anel)

        self.selecao.alternar(1, 'Dourado')
        self.selecao.alternar(1, 'Dourado')
        self.selecao.alternar(0, 'P')
        with self.assertRaises(SelecaoIncompletaError):
            self.use_case.executar(self.selecao, base_anel)

        self.assertEqual(self.carrinho_gateway_mock.adicionar_item_linha.call_count, 1)

    def test_selecao_incompleta_nao_chega_ao_carrinho(self):
        self.selecao.alternar(0, 'P')

        with self.assertRaises(SelecaoIncompletaError):
            self.use_case.executar(self.selecao, base_anel)

        self.carrinho_gateway_mock.adicionar_item_linha.assert_not_called()

    def test_combinacao_sem_estoque_nao_chega_ao_carrinho(self):
        catalogo = MontarCatalogoUseCase().executar([OpcaoVariante(id='1', nome='Azul', estoque=0)])
        selecao = EstadoSelecao(catalogo)
        selecao.alternar_variante(0)

        with self.assertRaises(EstoqueInsuficienteError) as contexto:
            self.use_case.executar(selecao, base_simples)

        self.assertEqual(contexto.exception.variante_id, '1')
        self.carrinho_gateway_mock.adicionar_item_linha.assert_not_called()


if __name__ == '__main__':
    unittest.main()
