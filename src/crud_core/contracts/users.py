"""
Users resource contract definitions
"""

from crud_core.contracts.base import ContractField, ResourceContract


def get_users_contract() -> ResourceContract:
    """Get users resource contract"""
    return ResourceContract(
        resource="users",
        fields=[
            ContractField(name="name"),
            ContractField(name="email"),
        ],
    )
