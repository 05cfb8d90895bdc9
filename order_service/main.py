import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from . import mapper, schemas, validation
from .config import Settings
from .database import Database
from .errors import BadRequestError
from .exception_handlers import configure_exception_handlers
from .repository import OrderRepository

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPE = "application/json"

router = APIRouter(
    prefix="/api/v1",
    responses={
        400: {"model": schemas.ErrorResponse},
        404: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Dependency to get database session
def get_db(request: Request):
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def get_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def require_json(request: Request):
    """Reject request bodies that are not declared as JSON"""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != ACCEPTED_CONTENT_TYPE:
        logger.warning(f"Rejected content type {content_type!r} on {request.method} {request.url.path}")
        raise BadRequestError("invalid content type")


def order_id_param(orderID: str) -> int:
    return validation.parse_order_id(orderID)


@router.get("/ping", tags=["Root"])
def ping():
    """Liveness check"""
    return "pong"


@router.get(
    "/orders",
    response_model=schemas.OrderListResponse,
    response_model_exclude_none=True,
    tags=["Orders"],
)
def read_orders(repo: OrderRepository = Depends(get_repository)):
    """Get all orders with their items"""
    orders, count = repo.list_orders()
    logger.info(f"Fetched {count} orders")
    return schemas.OrderListResponse(
        orders=[mapper.order_to_response(order) for order in orders],
        count=count,
    )


@router.get(
    "/orders/{orderID}",
    response_model=schemas.OrderResponse,
    response_model_exclude_none=True,
    tags=["Orders"],
)
def read_order(
    order_id: int = Depends(order_id_param),
    repo: OrderRepository = Depends(get_repository),
):
    """Get order by ID"""
    logger.info(f"Fetching order with ID: {order_id}")
    return mapper.order_to_response(repo.get_order(order_id))


@router.post(
    "/orders",
    response_model=schemas.OrderIdResponse,
    dependencies=[Depends(require_json)],
    tags=["Orders"],
)
def create_order(
    order: schemas.OrderCreate,
    repo: OrderRepository = Depends(get_repository),
):
    """Create a new order"""
    logger.info(f"Creating order for customer: {order.customer_name}")

    db_order = repo.create_order(order)
    logger.info(f"Created order {db_order.id} with {len(db_order.items)} items")
    return schemas.OrderIdResponse(success=True, order_id=db_order.id)


@router.api_route(
    "/orders/{orderID}",
    methods=["PUT", "PATCH"],
    response_model=schemas.OrderResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_json)],
    tags=["Orders"],
)
def update_order(
    order: schemas.OrderUpdate,
    order_id: int = Depends(order_id_param),
    repo: OrderRepository = Depends(get_repository),
):
    """Replace an order and its whole item set"""
    logger.info(f"Updating order ID: {order_id}")

    db_order = repo.update_order(order_id, order)
    return mapper.order_to_response(db_order, include_updated_at=True)


@router.delete("/orders/{orderID}", response_model=schemas.OrderIdResponse, tags=["Orders"])
def delete_order(
    order_id: int = Depends(order_id_param),
    repo: OrderRepository = Depends(get_repository),
):
    """Soft delete an order"""
    logger.info(f"Deleting order ID: {order_id}")
    deleted_id = repo.delete_order(order_id)
    return schemas.OrderIdResponse(success=True, order_id=deleted_id)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db.open()
        try:
            if settings.auto_migrate:
                # Create database tables
                app.state.db.create_tables()
                logger.info("Database tables ensured")
            yield
        finally:
            app.state.db.close()

    # Initialize FastAPI app
    app = FastAPI(
        title="Order Service",
        description="Creates, lists, updates and deletes customer orders and their items",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url, echo=settings.db_echo)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    configure_exception_handlers(app)

    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
