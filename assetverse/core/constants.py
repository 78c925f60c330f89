"""Core constants: default package catalog and shared literal values."""

# packageLimit of 0 means the HR account may affiliate any number of employees.
UNLIMITED_PACKAGE_LIMIT = 0

DEFAULT_SUBSCRIPTION = "basic"

# Seeded into the packages collection when it is empty.
DEFAULT_PACKAGES: list[dict] = [
    {
        "name": "Basic",
        "employeeLimit": 5,
        "price": 5,
        "features": ["Asset Tracking", "Employee Management", "Basic Support"],
    },
    {
        "name": "Standard",
        "employeeLimit": 10,
        "price": 8,
        "features": [
            "All Basic features",
            "Advanced Analytics",
            "Priority Support",
        ],
    },
    {
        "name": "Premium",
        "employeeLimit": 20,
        "price": 15,
        "features": [
            "All Standard features",
            "Custom Branding",
            "24/7 Support",
        ],
    },
]

# Default and maximum page size for list endpoints.
DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 200

# Store collection names (schema-in-code; collections are created on first write).
COLLECTION_USERS = "users"
COLLECTION_ASSETS = "assets"
COLLECTION_REQUESTS = "requests"
COLLECTION_REQUEST_GUARDS = "request_guards"
COLLECTION_ASSIGNMENTS = "assignments"
COLLECTION_AFFILIATIONS = "affiliations"
COLLECTION_PACKAGES = "packages"
COLLECTION_PAYMENTS = "payments"
# Uniqueness guards: one document per company name and per upgraded HR account.
COLLECTION_COMPANIES = "companies"
COLLECTION_UPGRADE_GUARDS = "upgrade_guards"
