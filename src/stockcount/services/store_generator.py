"""Synthetic store data for the mock ERP provider.

Three presets simulate different business sizes:

- small (grocery): 1 stock, 2 terminals, 4 categories
- medium (market): 3 stocks, 6 terminals, 8 categories
- large (supermarket): 5 stocks, 15 terminals, 12 categories

Structure (stocks, terminals, categories, catalog prices) comes from a seeded
generator, so a given size always yields the same store. Quantities sampled for
new counts use the module-level generator and vary on every draw.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Optional

from stockcount.domain.errors import ValidationError
from stockcount.domain.models import (
    CatalogProduct,
    Category,
    InventoryItem,
    Pdv,
    PdvStatus,
    Stock,
    utc_now_iso,
)


class StoreSize:
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ALL = frozenset({SMALL, MEDIUM, LARGE})


@dataclass(frozen=True)
class StorePreset:
    stock_count: int
    pdvs_per_stock: int
    category_count: int
    seed: int


PRESETS: dict[str, StorePreset] = {
    StoreSize.SMALL: StorePreset(stock_count=1, pdvs_per_stock=2, category_count=4, seed=42),
    StoreSize.MEDIUM: StorePreset(stock_count=3, pdvs_per_stock=2, category_count=8, seed=137),
    StoreSize.LARGE: StorePreset(stock_count=5, pdvs_per_stock=3, category_count=12, seed=271),
}


@dataclass(frozen=True)
class GeneratedStoreData:
    stocks: list[Stock]
    pdvs: list[Pdv]
    categories: list[Category]
    catalog: list[CatalogProduct]


@dataclass(frozen=True)
class StoreSummary:
    stocks: int
    pdvs: int
    categories: int
    products: int


SINGLE_STOCK_NAME = "Estoque Principal"
STOCK_SUFFIXES = ["Central", "Depósito A", "Depósito B", "Refrigerados", "Congelados"]

PDV_NAMES = [
    "Caixa 01", "Caixa 02", "Caixa 03", "Caixa 04", "Caixa 05",
    "Caixa 06", "Caixa 07", "Caixa 08", "PDV Balcão", "PDV Expresso",
    "Autoatendimento 01", "Autoatendimento 02",
]

ONLINE_THRESHOLD = 0.3
FIRST_PRODUCT_ID = 1000

# (category id, category name, [(product name, min price, max price, average qty)])
CATEGORY_CATALOG: list[tuple[str, str, list[tuple[str, float, float, int]]]] = [
    ("cat-mercearia", "Mercearia", [
        ("Arroz Tipo 1 5kg", 18.90, 28.90, 40),
        ("Feijão Carioca 1kg", 6.50, 9.90, 35),
        ("Feijão Preto 1kg", 7.20, 10.50, 25),
        ("Açúcar Refinado 1kg", 4.50, 6.90, 50),
        ("Açúcar Cristal 5kg", 15.90, 22.90, 20),
        ("Sal Refinado 1kg", 2.20, 3.50, 30),
        ("Farinha de Trigo 1kg", 4.90, 7.50, 35),
        ("Farinha de Mandioca 500g", 4.50, 6.90, 20),
        ("Macarrão Espaguete 500g", 3.90, 5.90, 45),
        ("Macarrão Parafuso 500g", 4.20, 6.50, 30),
        ("Molho de Tomate 340g", 2.50, 4.20, 50),
        ("Extrato de Tomate 350g", 3.90, 5.90, 25),
        ("Óleo de Soja 900ml", 6.90, 9.90, 40),
        ("Azeite Extra Virgem 500ml", 19.90, 34.90, 15),
        ("Vinagre de Álcool 750ml", 2.90, 4.50, 20),
        ("Leite Condensado 395g", 5.90, 8.50, 30),
        ("Creme de Leite 200g", 3.50, 5.20, 30),
        ("Milho Verde Lata 200g", 3.90, 5.90, 25),
        ("Ervilha Lata 200g", 3.50, 5.50, 20),
        ("Achocolatado em Pó 400g", 6.90, 10.90, 25),
    ]),
    ("cat-bebidas", "Bebidas", [
        ("Refrigerante Cola 2L", 7.90, 10.90, 60),
        ("Refrigerante Guaraná 2L", 6.90, 9.90, 50),
        ("Refrigerante Laranja 2L", 6.50, 8.90, 30),
        ("Refrigerante Cola Lata 350ml", 3.50, 4.90, 80),
        ("Suco de Laranja 1L", 6.90, 9.90, 25),
        ("Suco de Uva Integral 1L", 9.90, 14.90, 20),
        ("Água Mineral 500ml", 1.50, 2.50, 100),
        ("Água Mineral 1.5L", 2.90, 4.50, 60),
        ("Água de Coco 200ml", 3.90, 5.90, 40),
        ("Cerveja Pilsen Lata 350ml", 2.90, 4.50, 120),
        ("Cerveja Premium 600ml", 8.90, 14.90, 30),
        ("Vinho Tinto Suave 750ml", 15.90, 29.90, 15),
        ("Energético 250ml", 7.90, 10.90, 25),
        ("Chá Gelado Limão 1L", 5.50, 7.90, 20),
        ("Café Torrado 500g", 14.90, 24.90, 35),
        ("Café Solúvel 200g", 12.90, 19.90, 20),
    ]),
    ("cat-laticinios", "Laticínios", [
        ("Leite Integral 1L", 4.50, 6.90, 80),
        ("Leite Desnatado 1L", 4.90, 7.20, 40),
        ("Leite Longa Vida 1L", 5.50, 7.90, 50),
        ("Queijo Mussarela kg", 32.90, 45.90, 10),
        ("Queijo Prato Fatiado 150g", 8.90, 12.90, 20),
        ("Queijo Minas Frescal 500g", 14.90, 19.90, 15),
        ("Requeijão Cremoso 200g", 5.90, 8.90, 25),
        ("Manteiga 200g", 7.90, 12.90, 30),
        ("Margarina 500g", 5.50, 8.50, 40),
        ("Iogurte Natural 170g", 2.90, 4.50, 35),
        ("Iogurte Morango 170g", 3.20, 4.90, 30),
        ("Creme de Leite Fresco 200ml", 4.50, 6.90, 20),
        ("Cream Cheese 150g", 6.90, 9.90, 15),
        ("Presunto Fatiado 200g", 8.90, 13.90, 20),
    ]),
    ("cat-hortifruti", "Hortifruti", [
        ("Banana Prata kg", 4.90, 7.90, 30),
        ("Maçã Fuji kg", 9.90, 14.90, 25),
        ("Laranja Pera kg", 3.90, 6.90, 35),
        ("Limão Tahiti kg", 5.90, 9.90, 20),
        ("Mamão Formosa kg", 4.50, 7.50, 15),
        ("Melancia kg", 2.50, 4.50, 10),
        ("Tomate Italiano kg", 6.90, 11.90, 25),
        ("Cebola kg", 4.90, 7.90, 30),
        ("Batata Inglesa kg", 4.50, 7.50, 30),
        ("Cenoura kg", 4.90, 7.90, 20),
        ("Alface Crespa un", 2.50, 4.50, 15),
        ("Brócolis un", 5.90, 8.90, 10),
        ("Pimentão Verde kg", 7.90, 12.90, 12),
        ("Pepino un", 1.90, 3.50, 15),
        ("Abóbora Cabotiá kg", 4.90, 7.90, 10),
        ("Mandioca kg", 5.90, 8.90, 15),
    ]),
    ("cat-carnes", "Carnes e Frios", [
        ("Frango Inteiro kg", 9.90, 14.90, 20),
        ("Peito de Frango kg", 14.90, 22.90, 25),
        ("Coxa e Sobrecoxa kg", 10.90, 16.90, 20),
        ("Carne Moída kg", 22.90, 34.90, 15),
        ("Alcatra kg", 39.90, 54.90, 10),
        ("Picanha kg", 54.90, 79.90, 8),
        ("Costela Bovina kg", 24.90, 34.90, 12),
        ("Linguiça Toscana kg", 16.90, 24.90, 20),
        ("Salsicha 500g", 5.90, 8.90, 30),
        ("Presunto Cozido kg", 24.90, 34.90, 10),
        ("Mortadela kg", 12.90, 18.90, 15),
        ("Bacon Fatiado 200g", 9.90, 14.90, 15),
        ("Filé de Tilápia kg", 29.90, 39.90, 10),
        ("Camarão Médio kg", 49.90, 69.90, 5),
    ]),
    ("cat-padaria", "Padaria e Confeitaria", [
        ("Pão Francês kg", 12.90, 16.90, 40),
        ("Pão de Forma 500g", 6.90, 9.90, 30),
        ("Pão Integral 400g", 7.90, 10.90, 20),
        ("Bisnaguinha Pacote", 5.90, 8.50, 25),
        ("Bolo de Chocolate un", 14.90, 22.90, 8),
        ("Bolo de Laranja un", 12.90, 18.90, 8),
        ("Biscoito Cream Cracker 400g", 4.50, 6.90, 35),
        ("Biscoito Recheado Chocolate 130g", 2.50, 3.90, 40),
        ("Biscoito Maria 200g", 2.90, 4.50, 30),
        ("Rosquinha de Leite 300g", 4.90, 7.50, 20),
        ("Torrada Integral 160g", 4.50, 6.90, 15),
        ("Croissant un", 3.90, 5.90, 10),
    ]),
    ("cat-limpeza", "Limpeza", [
        ("Detergente 500ml", 2.20, 3.50, 50),
        ("Sabão em Pó 1kg", 9.90, 15.90, 30),
        ("Sabão em Barra 5un", 6.90, 9.90, 25),
        ("Amaciante 2L", 9.90, 14.90, 20),
        ("Água Sanitária 1L", 3.50, 5.50, 30),
        ("Desinfetante 500ml", 4.50, 6.90, 25),
        ("Limpador Multiuso 500ml", 5.90, 8.90, 20),
        ("Limpa Vidros 500ml", 6.90, 9.90, 15),
        ("Esponja Multiuso 3un", 2.90, 4.50, 25),
        ("Pano Multiuso 5un", 4.50, 6.90, 20),
        ("Saco de Lixo 50L 30un", 7.90, 11.90, 20),
        ("Saco de Lixo 100L 10un", 6.90, 9.90, 15),
        ("Luva de Borracha", 5.90, 8.90, 10),
        ("Rodo c/ Cabo", 12.90, 18.90, 8),
    ]),
    ("cat-higiene", "Higiene e Beleza", [
        ("Papel Higiênico 12un", 14.90, 22.90, 30),
        ("Sabonete Barra 90g", 1.90, 3.50, 40),
        ("Shampoo 350ml", 9.90, 16.90, 20),
        ("Condicionador 350ml", 10.90, 17.90, 15),
        ("Creme Dental 90g", 3.50, 5.90, 35),
        ("Escova Dental", 4.90, 8.90, 20),
        ("Desodorante Aerossol", 9.90, 16.90, 25),
        ("Absorvente 8un", 4.90, 7.90, 20),
        ("Fralda Descartável G 20un", 22.90, 34.90, 15),
        ("Lenço Umedecido 50un", 6.90, 9.90, 15),
        ("Algodão 50g", 3.90, 5.90, 10),
        ("Protetor Solar FPS 30", 19.90, 29.90, 10),
    ]),
    ("cat-congelados", "Congelados", [
        ("Pizza Congelada 440g", 12.90, 18.90, 20),
        ("Lasanha Congelada 600g", 14.90, 22.90, 15),
        ("Hambúrguer Bovino 672g", 12.90, 18.90, 20),
        ("Nuggets de Frango 300g", 9.90, 14.90, 25),
        ("Batata Pré-Frita 400g", 7.90, 11.90, 20),
        ("Sorvete 2L", 14.90, 24.90, 15),
        ("Picolé Pacote 4un", 7.90, 11.90, 20),
        ("Legumes Congelados 300g", 5.90, 8.90, 15),
        ("Pão de Queijo 400g", 9.90, 14.90, 20),
        ("Açaí 500ml", 12.90, 19.90, 10),
    ]),
    ("cat-pet", "Pet Shop", [
        ("Ração Cão Adulto 1kg", 12.90, 19.90, 20),
        ("Ração Cão Filhote 1kg", 14.90, 22.90, 15),
        ("Ração Gato Adulto 1kg", 14.90, 22.90, 15),
        ("Sachê Gato 85g", 2.50, 3.90, 40),
        ("Sachê Cão 100g", 2.90, 4.50, 30),
        ("Areia Sanitária 4kg", 9.90, 14.90, 10),
        ("Petisco Cão 80g", 5.90, 9.90, 15),
        ("Antipulgas Cão", 29.90, 49.90, 8),
    ]),
    ("cat-bazar", "Bazar e Utilidades", [
        ("Pilha Alcalina AA 4un", 9.90, 14.90, 15),
        ("Pilha Alcalina AAA 4un", 9.90, 14.90, 12),
        ("Lâmpada LED 9W", 7.90, 12.90, 10),
        ("Fita Adesiva 45mm", 3.90, 5.90, 15),
        ("Isqueiro", 2.90, 4.50, 20),
        ("Copo Descartável 200ml 100un", 4.90, 7.50, 15),
        ("Prato Descartável 15cm 10un", 2.90, 4.50, 10),
        ("Guardanapo 50un", 2.50, 3.90, 20),
        ("Papel Alumínio 30cm 7.5m", 4.90, 7.50, 12),
        ("Filme PVC 28cm 15m", 3.90, 5.90, 10),
    ]),
    ("cat-matinais", "Matinais e Cereais", [
        ("Cereal Matinal 300g", 9.90, 14.90, 20),
        ("Granola 800g", 12.90, 18.90, 15),
        ("Aveia em Flocos 250g", 4.50, 6.90, 20),
        ("Geleia de Morango 230g", 6.90, 9.90, 15),
        ("Mel 300g", 12.90, 19.90, 10),
        ("Chocolate ao Leite 90g", 4.90, 7.90, 30),
        ("Chocolate Amargo 90g", 6.90, 10.90, 15),
        ("Barra de Cereal 3un", 3.90, 5.90, 25),
        ("Wafer Chocolate 100g", 2.90, 4.50, 20),
        ("Paçoca 180g", 5.90, 8.90, 15),
    ]),
]


def _preset(size: str) -> StorePreset:
    preset = PRESETS.get(size)
    if preset is None:
        raise ValidationError(f"Unknown store size: {size!r}")
    return preset


def generate_store_data(size: str) -> GeneratedStoreData:
    """Build the stocks, terminals, categories and catalog for a store size.

    Output depends only on `size`: every call with the same size yields the
    same ids, names, statuses and prices (only `last_ping` reflects the clock).
    """
    preset = _preset(size)
    rand = random.Random(preset.seed)

    stock_ids = [f"est-{i + 1}" for i in range(preset.stock_count)]
    pos_by_stock: dict[str, list[str]] = {sid: [] for sid in stock_ids}

    pdvs: list[Pdv] = []
    now = utc_now_iso()
    for i in range(preset.stock_count * preset.pdvs_per_stock):
        stock_id = stock_ids[i % preset.stock_count]
        pdv_id = f"pdv-{i + 1}"
        online = rand.random() > ONLINE_THRESHOLD
        pdvs.append(
            Pdv(
                id=pdv_id,
                name=PDV_NAMES[i % len(PDV_NAMES)],
                status=PdvStatus.ONLINE if online else PdvStatus.OFFLINE,
                stock_id=stock_id,
                address=f"192.168.1.{10 + i}",
                last_ping=now if online else None,
            )
        )
        pos_by_stock[stock_id].append(pdv_id)

    stocks = [
        Stock(
            id=sid,
            name=SINGLE_STOCK_NAME if preset.stock_count == 1 else f"Estoque {STOCK_SUFFIXES[i % len(STOCK_SUFFIXES)]}",
            pos_ids=tuple(pos_by_stock[sid]),
            active=True,
        )
        for i, sid in enumerate(stock_ids)
    ]

    selected = CATEGORY_CATALOG[: preset.category_count]
    categories = [Category(id=cat_id, name=cat_name) for cat_id, cat_name, _ in selected]

    catalog: list[CatalogProduct] = []
    next_id = FIRST_PRODUCT_ID
    for cat_id, _cat_name, products in selected:
        for name, min_price, max_price, avg_qty in products:
            price = min_price + rand.random() * (max_price - min_price)
            qty = max(1, math.floor(avg_qty * (0.5 + rand.random()) + 0.5))
            catalog.append(
                CatalogProduct(
                    product_id=str(next_id),
                    name=name,
                    category_id=cat_id,
                    unit_value=round(price, 2),
                    base_system_qty=qty,
                )
            )
            next_id += 1

    return GeneratedStoreData(stocks=stocks, pdvs=pdvs, categories=categories, catalog=catalog)


def draw_inventory_items(
    catalog: list[CatalogProduct],
    inventory_id: str,
    count: int,
    category_filter: Optional[Iterable[str]] = None,
    rng: Optional[random.Random] = None,
) -> list[InventoryItem]:
    """Pick `count` products round-robin from the catalog as new count items.

    When `count` exceeds the pool, products are reused with a numeric suffix on
    the product id and name. System quantity varies +-30% around the base.
    """
    rng = rng or random
    wanted = set(category_filter or ())
    pool = [p for p in catalog if p.category_id in wanted] if wanted else list(catalog)
    if not pool:
        pool = list(catalog)
    if not pool:
        return []

    items: list[InventoryItem] = []
    for i in range(count):
        product = pool[i % len(pool)]
        lap = i // len(pool) + 1
        system_qty = max(1, math.floor(product.base_system_qty * (0.7 + rng.random() * 0.6) + 0.5))
        items.append(
            InventoryItem(
                id=f"i-{inventory_id}-{i + 1}",
                product_id=product.product_id if lap == 1 else f"{product.product_id}-{lap}",
                product_name=product.name if lap == 1 else f"{product.name} #{lap}",
                unit_value=product.unit_value,
                system_qty=system_qty,
            )
        )
    return items


def get_store_summary(size: str) -> StoreSummary:
    preset = _preset(size)
    products = sum(len(products) for _, _, products in CATEGORY_CATALOG[: preset.category_count])
    return StoreSummary(
        stocks=preset.stock_count,
        pdvs=preset.stock_count * preset.pdvs_per_stock,
        categories=preset.category_count,
        products=products,
    )
