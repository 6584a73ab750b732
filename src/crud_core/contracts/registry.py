"""
Contract registry for centralized contract management
"""

from typing import Dict, List

from crud_core.contracts.base import ResourceContract
from crud_core.contracts.journal_entries import get_journal_entries_contract
from crud_core.contracts.users import get_users_contract


def get_all_contracts() -> Dict[str, ResourceContract]:
    """Get all known resource contracts"""
    return {
        "journal_entries": get_journal_entries_contract(),
        "users": get_users_contract(),
    }


def get_contract(resource: str) -> ResourceContract:
    """
    Get the contract for a resource

    Resources without a declared contract accept every operation and any
    set of fields.
    """
    return get_all_contracts().get(resource) or ResourceContract(resource=resource)


def get_available_resources() -> List[str]:
    """Get list of all resources with a declared contract"""
    return list(get_all_contracts().keys())
