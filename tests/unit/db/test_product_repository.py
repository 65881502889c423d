import asyncio

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from inventory_api.core.exceptions import StorageFailure
from inventory_api.db.repositories.product_repository import ProductRepository


@pytest.mark.asyncio
async def test_list_by_name_is_sorted_regardless_of_insertion_order(make_product, product_repo):
    for name in ["Sugar", "Beans", "Rice", "Coffee"]:
        await make_product(name=name)

    docs = await product_repo.list_by_name()

    assert [d["name"] for d in docs] == ["Beans", "Coffee", "Rice", "Sugar"]


@pytest.mark.asyncio
async def test_increment_returns_updated_document(make_product, product_repo):
    pid = await make_product(name="Rice", quantity=10)

    doc = await product_repo.increment_quantity(pid, -3000)

    assert doc["quantity_milli"] == 7000


@pytest.mark.asyncio
async def test_increment_with_floor_does_not_match_below_it(make_product, product_repo):
    pid = await make_product(name="Rice", quantity=1)

    assert await product_repo.increment_quantity(pid, -1500, floor_milli=0) is None
    assert (await product_repo.get_by_id(pid))["quantity_milli"] == 1000


@pytest.mark.asyncio
async def test_replace_and_delete_unknown_ids(product_repo):
    unknown = str(ObjectId())
    assert await product_repo.replace(unknown, {"name": "X"}) is None
    assert await product_repo.delete(unknown) is False
    assert await product_repo.get_by_id("bogus") is None


class SlowCollection:
    async def find_one_and_update(self, *args, **kwargs):
        await asyncio.sleep(1)


class FailingCollection:
    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")


@pytest.mark.asyncio
async def test_storage_timeout_is_a_storage_failure(mongo_db):
    repo = ProductRepository(mongo_db, timeout=0.01)
    repo.collection = SlowCollection()

    with pytest.raises(StorageFailure, match="may still have been applied"):
        await repo.increment_quantity(str(ObjectId()), 1000)


@pytest.mark.asyncio
async def test_driver_errors_are_storage_failures(mongo_db):
    repo = ProductRepository(mongo_db)
    repo.collection = FailingCollection()

    with pytest.raises(StorageFailure):
        await repo.get_by_id(str(ObjectId()))


@pytest.mark.asyncio
async def test_migrate_legacy_moves_first_revision_fields(make_product, product_repo):
    await product_repo.collection.insert_one({"nome": "Arroz", "quantidade": 37})
    await product_repo.collection.insert_one({"nome": "Feijao", "quantidade": 2.5})
    current = await make_product(name="Beans", quantity=4)

    assert await product_repo.migrate_legacy() == 2
    assert await product_repo.migrate_legacy() == 0

    docs = {d["name"]: d for d in await product_repo.list_by_name()}
    assert docs["Arroz"]["quantity_milli"] == 37000
    assert docs["Feijao"]["quantity_milli"] == 2500
    assert docs["Arroz"]["unit"] == "UNIT"
    assert "nome" not in docs["Arroz"] and "quantidade" not in docs["Arroz"]
    assert str(docs["Beans"]["_id"]) == current
    assert docs["Beans"]["quantity_milli"] == 4000


@pytest.mark.asyncio
async def test_update_fields_only_touches_given_fields(make_product, product_repo):
    pid = await make_product(
        name="Coffee", quantity=3, unit="WEIGHT", variations=[{"name": "Pouch250", "weightKg": 0.25}]
    )

    doc = await product_repo.update_fields(pid, {"name": "Cafe", "quantity_milli": 8000})

    assert doc["name"] == "Cafe"
    assert doc["quantity_milli"] == 8000
    assert doc["unit"] == "WEIGHT"
    assert doc["variations"] == [{"name": "Pouch250", "weight_kg_milli": 250}]
