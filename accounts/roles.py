"""
Role catalogue and the operation → allowed-roles table.

Every gated endpoint names one operation from ``OPERATION_ROLES``; the role
gate looks the operation up here, so the whole access policy can be audited
in one place.
"""

LOADER = 'loader'
SWITCHER = 'switcher'
DISPATCHER = 'dispatcher'
SUPERVISOR = 'supervisor'
ADMIN = 'admin'
DRIVER = 'driver'

ROLE_CHOICES = [
    (LOADER, 'Loader'),
    (SWITCHER, 'Switcher'),
    (DISPATCHER, 'Dispatcher'),
    (SUPERVISOR, 'Supervisor'),
    (ADMIN, 'Admin'),
    (DRIVER, 'Driver'),
]

DEPARTMENT_CHOICES = [
    ('loading', 'Loading'),
    ('transportation', 'Transportation'),
    ('management', 'Management'),
    ('admin', 'Admin'),
]

ALL_ROLES = frozenset(role for role, _ in ROLE_CHOICES)
DISPATCH_ROLES = frozenset({DISPATCHER, SUPERVISOR, ADMIN})
YARD_ROLES = frozenset({SWITCHER, DISPATCHER, SUPERVISOR, ADMIN})
FLEET_MANAGERS = frozenset({SUPERVISOR, ADMIN})

OPERATION_ROLES = {
    # Request lifecycle
    'truck_request.create': frozenset({LOADER, ADMIN}),
    'truck_request.list': frozenset({LOADER, DISPATCHER, SUPERVISOR, ADMIN}),
    'truck_request.retrieve': frozenset({LOADER, DISPATCHER, SUPERVISOR, ADMIN}),
    'truck_request.assign': DISPATCH_ROLES,
    'truck_request.update_status': frozenset({LOADER, DISPATCHER, SUPERVISOR, ADMIN}),

    # Fleet
    'truck.list': frozenset({DISPATCHER, SUPERVISOR, ADMIN, SWITCHER}),
    'truck.create': FLEET_MANAGERS,
    'truck.change_status': FLEET_MANAGERS,
    'driver.list': DISPATCH_ROLES,
    'driver.create': FLEET_MANAGERS,
    'driver.change_status': FLEET_MANAGERS,

    # Yard
    'yard.bay.list': YARD_ROLES,
    'yard.bay.create': FLEET_MANAGERS,
    'yard.bay.assign': YARD_ROLES,
    'yard.movement.list': YARD_ROLES,
    'yard.movement.create': YARD_ROLES,
    'yard.queue.view': YARD_ROLES,
    'yard.queue.update': YARD_ROLES,

    # Notifications
    'notification.list': ALL_ROLES,
    'notification.create': DISPATCH_ROLES,
    'notification.read': ALL_ROLES,
    'notification.delete': ALL_ROLES,
    'notification.read_all': ALL_ROLES,

    # Users
    'user.profile': ALL_ROLES,
    'user.device_token': ALL_ROLES,
    'user.logout': ALL_ROLES,
    'admin.user.list': frozenset({ADMIN}),
    'admin.user.update': frozenset({ADMIN}),

    # Dashboards
    'dashboard.loader': frozenset({LOADER}),
    'dashboard.dispatcher': DISPATCH_ROLES,
    'dashboard.switcher': frozenset({SWITCHER}),
    'dashboard.driver': frozenset({DRIVER}),
    'dashboard.admin': frozenset({ADMIN}),
}


def roles_for(operation):
    """Allowed roles for ``operation``; unknown operations allow nobody."""
    return OPERATION_ROLES.get(operation, frozenset())
