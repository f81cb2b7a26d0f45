# Centralized field values and sentinels to prevent drift.

from typing import Literal

PaymentStatus = Literal["pending", "paid", "overdue"]
CollectionStatus = Literal["pending", "collected", "not-available"]
PaymentMode = Literal["none", "offline", "online"]
CollectorStatus = Literal["active", "inactive"]
RouteStatus = Literal["active", "completed"]
LogStatus = Literal["collected", "not-available", "skipped", "paid"]
Role = Literal["admin", "collector", "household"]

PENDING = "pending"
PAID = "paid"
COLLECTED = "collected"
NOT_AVAILABLE = "not-available"

# Statuses a collector may record for a household visit.
COLLECTION_EVENT_STATUSES = (COLLECTED, NOT_AVAILABLE)

# Log statuses that count as a household being covered for the day.
COVERED_LOG_STATUSES = (COLLECTED, PAID)

UNASSIGNED = "unassigned"

# Resident self-service payments are logged under this collector id.
SYSTEM_COLLECTOR_ID = "SYSTEM"
SYSTEM_COLLECTOR_NAME = "Resident Portal"
ONLINE_LOCATION = "Online Gateway"

ROUTE_START_CLOCK = "08:00 AM"

PAYMENT_STATUSES = ("pending", "paid", "overdue")
PAYMENT_MODES = ("none", "offline", "online")
