"""
Journal entries resource contract definitions
"""

from crud_core.contracts.base import ContractField, ResourceContract


def get_journal_entries_contract() -> ResourceContract:
    """Get journal_entries resource contract"""
    return ResourceContract(
        resource="journal_entries",
        fields=[
            ContractField(name="title"),
            ContractField(name="content", required=False),
        ],
    )
