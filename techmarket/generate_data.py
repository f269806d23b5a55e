# generate_data.py
"""
Gerador de dados fictícios para o benchmark.

Produz clientes, produtos e pedidos (com itens e pagamento embutidos) em
dicionários simples, consumidos pelas rotinas de seed dos três bancos.
"""
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from faker import Faker

from techmarket.timing import utc_now

CENTAVOS = Decimal("0.01")

# Categorias de produtos
CATEGORIAS = ['Smartphones', 'Notebooks', 'Tablets', 'Acessórios', 'Periféricos',
              'Monitores', 'Smart TVs', 'Áudio', 'Câmeras', 'Games', 'Ferramentas']

# Status de pedidos
STATUS_PEDIDO = ['PENDING', 'SHIPPED', 'DELIVERED']

# Tipos de pagamento
TIPOS_PAGAMENTO = ['cartao', 'boleto', 'pix']
STATUS_PAGAMENTO = ['PENDING', 'COMPLETED', 'FAILED']

MIN_PRECO, MAX_PRECO = 10, 5000
MIN_ESTOQUE, MAX_ESTOQUE = 1, 1000
MAX_ITENS_POR_PEDIDO = 5
MAX_QUANTIDADE = 10


@dataclass
class Dataset:
    clientes: list = field(default_factory=list)
    produtos: list = field(default_factory=list)
    pedidos: list = field(default_factory=list)

    @property
    def itens(self):
        return [dict(item, id_pedido=pedido['id'])
                for pedido in self.pedidos for item in pedido['itens']]

    @property
    def pagamentos(self):
        return [dict(pagamento, id_pedido=pedido['id'])
                for pedido in self.pedidos for pagamento in pedido['pagamentos']]


def calcular_valor_total(itens):
    total = sum((item['valor_unitario'] * item['quantidade'] for item in itens), Decimal("0"))
    return total.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


class MockDataGenerator:
    def __init__(self, seed=None, locale='pt_BR'):
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        self.random = self.fake.random

    def _uuid(self):
        return uuid.UUID(int=self.random.getrandbits(128), version=4)

    def _data_entre(self, inicio, fim):
        segundos = int((fim - inicio).total_seconds())
        return inicio + timedelta(seconds=self.random.randint(0, max(segundos, 0)))

    def gerar_clientes(self, num):
        agora = utc_now()
        clientes = []
        for i in range(num):
            clientes.append({
                'id': self._uuid(),
                'nome': self.fake.name(),
                # prefixo numérico garante unicidade sem o custo de fake.unique
                'email': f"{i}{self.fake.email()}",
                'telefone': self.fake.phone_number(),
                'cpf': self.fake.numerify('#' * 11),
                'data_cadastro': self._data_entre(agora - timedelta(days=3 * 365), agora),
            })
        return clientes

    def gerar_produtos(self, num):
        produtos = []
        for _ in range(num):
            preco = Decimal(str(self.random.uniform(MIN_PRECO, MAX_PRECO))).quantize(CENTAVOS)
            produtos.append({
                'id': self._uuid(),
                'nome': self.fake.word().capitalize() + ' ' + self.fake.word().capitalize(),
                'categoria': self.random.choice(CATEGORIAS),
                'preco': preco,
                'estoque': self.random.randint(MIN_ESTOQUE, MAX_ESTOQUE),
            })
        return produtos

    def gerar_itens(self, produtos):
        itens = []
        for _ in range(self.random.randint(1, MAX_ITENS_POR_PEDIDO)):
            produto = self.random.choice(produtos)
            itens.append({
                'id': self._uuid(),
                'id_produto': produto['id'],
                'quantidade': self.random.randint(1, MAX_QUANTIDADE),
                'valor_unitario': produto['preco'],
            })
        return itens

    def gerar_pagamento(self, data_pedido, agora):
        return {
            'id': self._uuid(),
            'tipo': self.random.choice(TIPOS_PAGAMENTO),
            'status': self.random.choice(STATUS_PAGAMENTO),
            'data_pagamento': self._data_entre(data_pedido, agora),
        }

    def gerar_pedidos(self, num, clientes, produtos):
        if num and (not clientes or not produtos):
            raise ValueError("pedidos exigem ao menos um cliente e um produto")

        agora = utc_now()
        um_ano_atras = agora - timedelta(days=365)
        pedidos = []
        for _ in range(num):
            data_pedido = self._data_entre(um_ano_atras, agora)
            itens = self.gerar_itens(produtos)
            pedidos.append({
                'id': self._uuid(),
                'id_cliente': self.random.choice(clientes)['id'],
                'data_pedido': data_pedido,
                'status': self.random.choice(STATUS_PEDIDO),
                'valor_total': calcular_valor_total(itens),
                'itens': itens,
                'pagamentos': [self.gerar_pagamento(data_pedido, agora)],
            })
        return pedidos

    def gerar_dataset(self, num_clientes, num_produtos, num_pedidos):
        clientes = self.gerar_clientes(num_clientes)
        produtos = self.gerar_produtos(num_produtos)
        pedidos = self.gerar_pedidos(num_pedidos, clientes, produtos)
        return Dataset(clientes=clientes, produtos=produtos, pedidos=pedidos)
