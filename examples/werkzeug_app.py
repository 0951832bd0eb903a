from __future__ import annotations

from pydantic import BaseModel
from werkzeug.serving import run_simple
from werkzeug.wrappers import Response

from genro_swagger import Router
from genro_swagger.adapters.werkzeug import WerkzeugAdapter


class Invoice(BaseModel):
    number: str
    total: float


app = WerkzeugAdapter()
router = Router(app, {"title": "Billing", "version": "1.0.0"})


@router.route("GET", "/health", openapi_summary="Liveness probe")
def health(request):
    return Response("OK")


billing = router.sub_router("/billing")


@billing.route(
    "GET",
    "/invoices/<number>",
    {"responses": {200: {"description": "The invoice", "content": {"application/json": {"schema": Invoice}}}}},
    openapi_tags=["billing"],
)
def get_invoice(request, number):
    invoice = Invoice(number=number, total=42.0)
    return Response(invoice.model_dump_json(), mimetype="application/json")


router.generate_and_expose_swagger()

if __name__ == "__main__":
    print("--- Billing API ---")
    for route in router.iter_routes():
        print(f" - {route.method} {route.full_path}")
    print("OpenAPI document at http://localhost:5000/documentation/json")
    run_simple("localhost", 5000, app)
