from typing import Dict, FrozenSet

ADMIN = "admin"
DRIVER = "driver"
USER = "user"

ROLES = (ADMIN, USER, DRIVER)

# endpoint -> roles allowed to call it
PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "drivers:create": frozenset({DRIVER}),
    "drivers:list": frozenset({ADMIN}),
    "drivers:read": frozenset({ADMIN}),
    "drivers:update": frozenset({DRIVER}),
    "drivers:delete": frozenset({ADMIN}),
    "drivers:payment": frozenset({ADMIN, DRIVER}),

    "orders:create": frozenset({ADMIN, USER}),
    "orders:list": frozenset({ADMIN, DRIVER}),
    "orders:read": frozenset({ADMIN, DRIVER}),
    "orders:update": frozenset({ADMIN, DRIVER}),
    "orders:delete": frozenset({ADMIN}),

    "routes:create": frozenset({ADMIN, DRIVER}),
    "routes:list": frozenset({ADMIN}),
    "routes:read": frozenset({ADMIN, DRIVER}),
    "routes:update": frozenset({ADMIN, DRIVER}),
    "routes:delete": frozenset({ADMIN}),
    "routes:add_step": frozenset({ADMIN, DRIVER}),
}


def is_allowed(endpoint: str, role: str) -> bool:
    return role in PERMISSIONS[endpoint]
