"""Sub-registry of crm.lead.* methods."""

from typing import Dict

from bxregistry.entities import Lead
from bxregistry.methods import Method, MethodDescriptor
from bxregistry.params import AddParams, IdParams, ListParams, UpdateParams
from bxregistry.payloads import GetPayload, ListPayload

LEADS_METHODS: Dict[Method, MethodDescriptor] = {
    Method.CRM_LEAD_GET: MethodDescriptor(
        method=Method.CRM_LEAD_GET,
        type=Lead,
        payload=GetPayload[Lead],
        params=IdParams,
    ),
    # Returns the ID of the created lead
    Method.CRM_LEAD_ADD: MethodDescriptor(
        method=Method.CRM_LEAD_ADD,
        type=Lead,
        payload=GetPayload[int],
        params=AddParams,
    ),
    Method.CRM_LEAD_UPDATE: MethodDescriptor(
        method=Method.CRM_LEAD_UPDATE,
        type=Lead,
        payload=GetPayload[bool],
        params=UpdateParams,
    ),
    Method.CRM_LEAD_LIST: MethodDescriptor(
        method=Method.CRM_LEAD_LIST,
        type=Lead,
        payload=ListPayload[Lead],
        params=ListParams,
    ),
}
