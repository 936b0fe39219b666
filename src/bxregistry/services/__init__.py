"""Per-domain method sub-registries.

Each module maps its methods to descriptors. The registry merges them into
one lookup and rejects any identifier defined twice.
"""

from bxregistry.services.contacts import CONTACTS_METHODS
from bxregistry.services.deals import DEALS_METHODS
from bxregistry.services.leads import LEADS_METHODS
from bxregistry.services.statuses import STATUSES_METHODS

SUB_REGISTRIES = {
    "contacts": CONTACTS_METHODS,
    "deals": DEALS_METHODS,
    "leads": LEADS_METHODS,
    "statuses": STATUSES_METHODS,
}

__all__ = [
    "CONTACTS_METHODS",
    "DEALS_METHODS",
    "LEADS_METHODS",
    "STATUSES_METHODS",
    "SUB_REGISTRIES",
]
