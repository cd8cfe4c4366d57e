"""
Enumerations shared by the request/response schemas
"""

from enum import Enum


class UserRole(str, Enum):
    TECHNICIAN = "technician"
    SUPPORT_CENTER = "support_center"
    SUPER_ADMIN = "super_admin"


class ServiceType(str, Enum):
    ELECTRICAL = "electrical"
    EMERGENCY_EXIT_LIGHT = "emergency_exit_light"
    FIRE_TESTING = "fire_testing"


class Country(str, Enum):
    AUSTRALIA = "australia"
    NEW_ZEALAND = "newzealand"


class ResultValue(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class Frequency(str, Enum):
    """Inspection cadences. Electrical uses the monthly family plus five-yearly;
    emergency lighting uses sixmonthly and annually."""
    MONTHLY = "monthly"
    THREE_MONTHLY = "threemonthly"
    SIX_MONTHLY = "sixmonthly"
    TWELVE_MONTHLY = "twelvemonthly"
    ANNUALLY = "annually"
    TWENTY_FOUR_MONTHLY = "twentyfourmonthly"
    FIVE_YEARLY = "fiveyearly"


class MaintenanceType(str, Enum):
    MAINTAINED = "maintained"
    NON_MAINTAINED = "non_maintained"
