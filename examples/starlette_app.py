from __future__ import annotations

import json

from starlette.responses import JSONResponse, PlainTextResponse
from starlette.testclient import TestClient

from genro_swagger import Operation, Router
from genro_swagger.adapters.starlette import StarletteAdapter

app = StarletteAdapter()
router = Router(app, {"title": "Inventory", "version": "1.0.0"})


async def health(request):
    return PlainTextResponse("OK")


async def stock_level(request):
    return JSONResponse({"item": request.path_params["item_id"], "qty": 42})


router.add_route("GET", "/health", health)

# COMPOSITION: nested sub-routers, prefixes compose to /inventory/v1
inventory = router.sub_router("/inventory")
v1 = inventory.sub_router("/v1")
v1.add_route(
    "GET",
    "/items/{item_id}/stock",
    stock_level,
    Operation(summary="Stock level of an item", tags=["inventory"]),
)

router.generate_and_expose_swagger()

if __name__ == "__main__":
    client = TestClient(app)

    print("--- Inventory API ---")
    print(f"Stock: {client.get('/inventory/v1/items/part-123/stock').json()}")

    document = json.loads(client.get("/documentation/json").text)
    print("\nDocumented paths:")
    for path in document["paths"]:
        print(f" - {path}")
