"""顧客APIのHTTPルート定義。"""

from typing import Any

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from patron.models.customer import CustomerInput
from patron.models.errors import RequestBodyError
from patron.models.validation import ValidationFailure
from patron.services.customer import CustomerService


async def read_customer_input(request: Request) -> CustomerInput:
    """リクエストボディを顧客データとして読み込む。

    Raises:
        RequestBodyError: UTF-8やJSONとして不正、または型が合わない場合。
    """
    try:
        body: Any = await request.json()
    except ValueError:
        raise RequestBodyError([ValidationFailure(field="body", message="Request body must be valid JSON")]) from None

    try:
        return CustomerInput.model_validate(body)
    except ValidationError as e:
        failures = [
            ValidationFailure(
                field=".".join(str(part) for part in error["loc"]) or "body",
                message=error["msg"],
            )
            for error in e.errors()
        ]
        raise RequestBodyError(failures) from None


def customer_routes(customer_service: CustomerService, *, prefix: str = "/api") -> list[Route]:
    """顧客CRUDのルートを組み立てる。"""

    async def list_customers(request: Request) -> JSONResponse:
        """List customers.
        ---
        responses:
          200:
            description: All customers in registration order.
        """
        customers = await customer_service.list_customers()
        return JSONResponse([c.model_dump(mode="json") for c in customers])

    async def get_customer(request: Request) -> JSONResponse:
        """Fetch one customer.
        ---
        responses:
          200:
            description: The customer.
          404:
            description: No customer with this id.
        """
        customer = await customer_service.get_customer(request.path_params["customer_id"])
        return JSONResponse(customer.model_dump(mode="json"))

    async def create_customer(request: Request) -> JSONResponse:
        """Register a customer.
        ---
        responses:
          201:
            description: Created. The Location header points at the new customer.
          400:
            description: The body violates one or more business rules.
        """
        data = await read_customer_input(request)
        customer = await customer_service.create_customer(data)
        location = str(request.url_for("get_customer", customer_id=customer.id))
        return JSONResponse(customer.model_dump(mode="json"), status_code=201, headers={"Location": location})

    async def update_customer(request: Request) -> Response:
        """Replace a customer's data.
        ---
        responses:
          204:
            description: Updated.
          400:
            description: The body violates one or more business rules.
          404:
            description: No customer with this id.
        """
        data = await read_customer_input(request)
        await customer_service.update_customer(request.path_params["customer_id"], data)
        return Response(status_code=204)

    async def delete_customer(request: Request) -> Response:
        """Delete a customer.
        ---
        responses:
          204:
            description: Deleted.
          404:
            description: No customer with this id.
        """
        await customer_service.delete_customer(request.path_params["customer_id"])
        return Response(status_code=204)

    collection = f"{prefix}/customers"
    item = f"{collection}/{{customer_id:int}}"
    return [
        Route(collection, list_customers, methods=["GET"]),
        Route(collection, create_customer, methods=["POST"]),
        Route(item, get_customer, methods=["GET"]),
        Route(item, update_customer, methods=["PUT"]),
        Route(item, delete_customer, methods=["DELETE"]),
    ]
