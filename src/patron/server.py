"""StarletteベースのHTTPサーバーエントリポイント。"""

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.schemas import SchemaGenerator

from patron.config import ServerConfig
from patron.middleware import RequestLoggingMiddleware
from patron.models.errors import CustomerNotFoundError, CustomerValidationError, PatronError, RequestBodyError
from patron.routes.customers import customer_routes
from patron.services.customer import CustomerService
from patron.storage.service import CustomerStore
from patron.validators.customer import CustomerValidator

schemas = SchemaGenerator({"openapi": "3.0.0", "info": {"title": "Patron Customer API", "version": "0.1.0"}})


def _error_body(exc: PatronError) -> dict[str, object]:
    return {"error": type(exc).__name__, "message": str(exc)}


async def not_found_handler(request: Request, exc: CustomerNotFoundError) -> Response:
    return JSONResponse(_error_body(exc), status_code=404)


async def invalid_data_handler(request: Request, exc: CustomerValidationError | RequestBodyError) -> Response:
    body = _error_body(exc)
    body["failures"] = [f.model_dump() for f in exc.failures]
    return JSONResponse(body, status_code=400)


def create_app(config: ServerConfig | None = None, customer_service: CustomerService | None = None) -> Starlette:
    """Patron HTTPアプリケーションを作成し、ルートとエラーハンドラを登録する。

    Args:
        config: サーバー設定。Noneの場合はデフォルト設定を使用。
        customer_service: 顧客サービス。Noneの場合は空のストアで新規作成する。

    Returns:
        設定済みのStarletteアプリケーション。
    """
    if config is None:
        config = ServerConfig()

    if customer_service is None:
        customer_service = CustomerService(store=CustomerStore(), validator=CustomerValidator())

    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def openapi_schema(request: Request) -> Response:
        return schemas.OpenAPIResponse(request=request)

    routes = [
        *customer_routes(customer_service, prefix=config.api_prefix),
        Route("/health", health_check, methods=["GET"], include_in_schema=False),
        Route("/schema", openapi_schema, methods=["GET"], include_in_schema=False),
    ]

    return Starlette(
        routes=routes,
        middleware=[Middleware(RequestLoggingMiddleware)],
        exception_handlers={
            CustomerNotFoundError: not_found_handler,
            CustomerValidationError: invalid_data_handler,
            RequestBodyError: invalid_data_handler,
        },
    )
