from typing import Dict

from pymongo import ASCENDING, ReturnDocument

from inventory_api.db.models import legacy_to_current
from inventory_api.db.repositories.base_repository import BaseRepository, parse_object_id


class ProductRepository(BaseRepository):
    collection_name = "ProdutosNoEstoque"

    async def list_by_name(self):
        return await self.list({}, sort=[("name", ASCENDING)])

    async def replace(self, _id: str, document: Dict) -> Dict | None:
        oid = parse_object_id(_id)
        if oid is None:
            return None
        return await self._run(
            "replace",
            self.collection.find_one_and_replace(
                {"_id": oid}, document, return_document=ReturnDocument.AFTER
            ),
        )

    async def update_fields(self, _id: str, fields: Dict) -> Dict | None:
        oid = parse_object_id(_id)
        if oid is None:
            return None
        return await self._run(
            "update",
            self.collection.find_one_and_update(
                {"_id": oid}, {"$set": fields}, return_document=ReturnDocument.AFTER
            ),
        )

    async def migrate_legacy(self) -> int:
        """Rewrite documents from the first client revision (``nome``, ``quantidade``) to the current shape.

        Each update is conditional on the legacy quantity it was computed from.
        """
        migrated = 0
        for doc in await self.list({"quantity_milli": {"$exists": False}}):
            res = await self._run(
                "migrate",
                self.collection.update_one(
                    {"_id": doc["_id"], "quantity_milli": {"$exists": False}, "quantidade": doc.get("quantidade")},
                    {"$set": legacy_to_current(doc), "$unset": {"nome": "", "quantidade": ""}},
                ),
            )
            migrated += res.modified_count
        if migrated:
            self.log.info(f"migrated {migrated} legacy product documents")
        return migrated

    async def increment_quantity(self, _id: str, delta_milli: int, floor_milli: int | None = None) -> Dict | None:
        """Atomically add ``delta_milli`` to the stored quantity.

        With ``floor_milli`` set, the increment only matches while the result
        stays at or above the floor. Returns the updated document, or None when
        nothing matched (unknown id, or the floor would be crossed).
        """
        oid = parse_object_id(_id)
        if oid is None:
            return None
        query: Dict = {"_id": oid}
        if floor_milli is not None:
            query["quantity_milli"] = {"$gte": floor_milli - delta_milli}
        doc = await self._run(
            "increment",
            self.collection.find_one_and_update(
                query, {"$inc": {"quantity_milli": delta_milli}}, return_document=ReturnDocument.AFTER
            ),
        )
        self.log.debug(f"increment {_id} by {delta_milli} -> {'applied' if doc else 'no match'}")
        return doc
