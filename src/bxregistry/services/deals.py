"""Sub-registry of crm.deal.* methods.

Deal lists are the usual target of the `>PROBABILITY` filter.
"""

from typing import Dict

from bxregistry.entities import Deal
from bxregistry.methods import Method, MethodDescriptor
from bxregistry.params import AddParams, IdParams, ListParams, UpdateParams
from bxregistry.payloads import GetPayload, ListPayload

DEALS_METHODS: Dict[Method, MethodDescriptor] = {
    Method.CRM_DEAL_GET: MethodDescriptor(
        method=Method.CRM_DEAL_GET,
        type=Deal,
        payload=GetPayload[Deal],
        params=IdParams,
    ),
    Method.CRM_DEAL_ADD: MethodDescriptor(
        method=Method.CRM_DEAL_ADD,
        type=Deal,
        payload=GetPayload[int],
        params=AddParams,
    ),
    Method.CRM_DEAL_UPDATE: MethodDescriptor(
        method=Method.CRM_DEAL_UPDATE,
        type=Deal,
        payload=GetPayload[bool],
        params=UpdateParams,
    ),
    Method.CRM_DEAL_LIST: MethodDescriptor(
        method=Method.CRM_DEAL_LIST,
        type=Deal,
        payload=ListPayload[Deal],
        params=ListParams,
    ),
}
