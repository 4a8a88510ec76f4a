"""
Shared constants for Shopify access and order export.
"""

API_VERSION = "2024-01"
PAGE_SIZE = 250

# Fetch stops once the accumulated item count exceeds these
ORDER_SAFETY_CAP = 5000
PRODUCT_SAFETY_CAP = 2000

OAUTH_SCOPES = "read_orders,read_products"

# Products whose tags contain any of these (case-insensitive) are courses
COURSE_TAG_KEYWORDS = ("training", "community")

GUEST_CUSTOMER_NAME = "Guest"

# Line item property names seen at checkout, in probe order.
# Different product templates have used different labels over time.
PROPERTY_ALIASES = {
    "childName": ("Child's Name", "Child Name", "child_name"),
    "childAge": ("Child's Age", "Child Age", "child_age"),
    "childDOB": ("Child's Date of Birth", "Date of Birth", "child_dob"),
    "medicalConditions": ("Known Medical Conditions", "Medical Conditions", "medical_conditions"),
    "contactPhone": ("Contact Telephone Number", "Contact Phone", "phone"),
    "contactEmail": ("Contact Email", "contact_email"),
}
