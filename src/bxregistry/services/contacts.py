"""Sub-registry of crm.contact.* methods."""

from typing import Dict

from bxregistry.entities import Contact
from bxregistry.methods import Method, MethodDescriptor
from bxregistry.params import AddParams, IdParams, ListParams, UpdateParams
from bxregistry.payloads import GetPayload, ListPayload

CONTACTS_METHODS: Dict[Method, MethodDescriptor] = {
    Method.CRM_CONTACT_GET: MethodDescriptor(
        method=Method.CRM_CONTACT_GET,
        type=Contact,
        payload=GetPayload[Contact],
        params=IdParams,
    ),
    # Returns the ID of the created contact
    Method.CRM_CONTACT_ADD: MethodDescriptor(
        method=Method.CRM_CONTACT_ADD,
        type=Contact,
        payload=GetPayload[int],
        params=AddParams,
    ),
    Method.CRM_CONTACT_UPDATE: MethodDescriptor(
        method=Method.CRM_CONTACT_UPDATE,
        type=Contact,
        payload=GetPayload[bool],
        params=UpdateParams,
    ),
    Method.CRM_CONTACT_LIST: MethodDescriptor(
        method=Method.CRM_CONTACT_LIST,
        type=Contact,
        payload=ListPayload[Contact],
        params=ListParams,
    ),
}
