"""Sample records for the in-memory stores (local runs with ``api.use_mock``)."""

from datetime import UTC, datetime
from decimal import Decimal

from backoffice.domain.auth.model.user import User
from backoffice.domain.catalog.model.item import Item, ItemStatus
from backoffice.domain.customer.model.customer import Customer
from backoffice.domain.pos.model.sale import Sale, SaleLine
from backoffice.domain.pos.model.value import PaymentMethod, PaymentStatus

SAMPLE_ITEMS: tuple[Item, ...] = (
    Item(
        id="101",
        name="Thunderbolt RC Car 4WD",
        sku="RC-4WD-001",
        category="RC Vehicles",
        price=Decimal("299.99"),
        stock=12,
        description="High speed electric RC car with brushless motor.",
        status=ItemStatus.ACTIVE,
        last_updated=datetime(2023, 10, 25, 10, 0, tzinfo=UTC),
    ),
    Item(
        id="102",
        name="Dragon Storm Launcher",
        sku="BB-LNC-002",
        category="Beyblade",
        price=Decimal("18.50"),
        stock=3,
        status=ItemStatus.ACTIVE,
    ),
    Item(
        id="103",
        name="Stadium Arena Pro",
        sku="BB-ARN-003",
        category="Beyblade",
        price=Decimal("45.00"),
        stock=0,
        status=ItemStatus.ACTIVE,
    ),
    Item(
        id="104",
        name="Spare Battery Pack",
        sku="RC-BAT-004",
        category="RC Parts",
        price=Decimal("24.95"),
        stock=40,
        status=ItemStatus.DRAFT,
    ),
)

SAMPLE_CUSTOMERS: tuple[Customer, ...] = (
    Customer(
        id="cust-001",
        name="John Doe",
        email="john.doe@email.com",
        phone="+1234567890",
        total_purchases=Decimal("1250.75"),
        visits=15,
        created_at=datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
        last_visit=datetime(2024, 12, 18, 14, 20, tzinfo=UTC),
    ),
)

SAMPLE_SALES: tuple[Sale, ...] = (
    Sale(
        id="sale-001",
        timestamp=datetime(2024, 12, 18, 14, 20, tzinfo=UTC),
        items=(
            SaleLine(
                item_id="101",
                item_name="Thunderbolt RC Car 4WD",
                sku="RC-4WD-001",
                quantity=1,
                price=Decimal("299.99"),
                subtotal=Decimal("299.99"),
            ),
        ),
        subtotal=Decimal("299.99"),
        tax=Decimal("24.00"),
        total=Decimal("323.99"),
        payment_method=PaymentMethod.CARD,
        customer_id="cust-001",
        customer_name="John Doe",
        staff_id="admin-1",
        staff_name="Admin User",
    ),
    Sale(
        id="sale-002",
        timestamp=datetime(2024, 12, 19, 9, 5, tzinfo=UTC),
        items=(
            SaleLine(
                item_id="102",
                item_name="Dragon Storm Launcher",
                sku="BB-LNC-002",
                quantity=2,
                price=Decimal("18.50"),
                subtotal=Decimal("37.00"),
            ),
        ),
        subtotal=Decimal("37.00"),
        tax=Decimal("2.96"),
        total=Decimal("39.96"),
        payment_method=PaymentMethod.CASH,
        payment_status=PaymentStatus.PENDING,
        staff_id="editor-1",
        staff_name="Sales Clerk",
    ),
)

# Local accounts with their dev passwords
SAMPLE_USERS: tuple[tuple[User, str], ...] = (
    (User(id="admin-1", email="admin@example.com", name="Admin User", role="super_admin"), "admin123"),
    (User(id="manager-1", email="manager@example.com", name="Store Manager", role="manager"), "manager123"),
    (User(id="editor-1", email="editor@example.com", name="Sales Clerk", role="editor"), "editor123"),
    (User(id="viewer-1", email="viewer@example.com", name="Auditor", role="viewer"), "viewer123"),
)
