"""Sub-registry of crm.status.* methods.

Statuses are reference book entries (lead statuses, deal stages, sources).
`crm.status.list` returns every entry of the matching reference books in one
response, so it is not paginated and is not a listable method.
"""

from typing import Dict, List

from bxregistry.entities import FieldDescriptor, Status
from bxregistry.methods import Method, MethodDescriptor
from bxregistry.params import (
    EmptyParams,
    IdParams,
    StatusAddParams,
    StatusListParams,
    StatusUpdateParams,
)
from bxregistry.payloads import GetPayload

STATUSES_METHODS: Dict[Method, MethodDescriptor] = {
    Method.CRM_STATUS_GET: MethodDescriptor(
        method=Method.CRM_STATUS_GET,
        type=Status,
        payload=GetPayload[Status],
        params=IdParams,
    ),
    Method.CRM_STATUS_ADD: MethodDescriptor(
        method=Method.CRM_STATUS_ADD,
        type=Status,
        payload=GetPayload[int],
        params=StatusAddParams,
    ),
    Method.CRM_STATUS_UPDATE: MethodDescriptor(
        method=Method.CRM_STATUS_UPDATE,
        type=Status,
        payload=GetPayload[bool],
        params=StatusUpdateParams,
    ),
    Method.CRM_STATUS_LIST: MethodDescriptor(
        method=Method.CRM_STATUS_LIST,
        type=Status,
        payload=GetPayload[List[Status]],
        params=StatusListParams,
    ),
    Method.CRM_STATUS_FIELDS: MethodDescriptor(
        method=Method.CRM_STATUS_FIELDS,
        type=Status,
        payload=GetPayload[Dict[str, FieldDescriptor]],
        params=EmptyParams,
    ),
}
