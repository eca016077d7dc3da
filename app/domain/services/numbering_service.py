"""Numbering service for invoice numbers.
Allocates the next number of a tenant's invoice sequence.
"""

from typing import Tuple

from app.domain.models.value_objects import (
    DEFAULT_INVOICE_PREFIX,
    INVOICE_NUMBER_WIDTH,
    InvoiceNumber,
    InvoiceSequence,
)


class NumberingService:
    """
    Domain service for sequential invoice numbering.
    Pure: persisting the advanced sequence is the caller's job, in the same
    transaction that stores the invoice.
    """

    def __init__(self, width: int = INVOICE_NUMBER_WIDTH):
        self.width = width

    def allocate(self, sequence: InvoiceSequence) -> Tuple[str, InvoiceSequence]:
        """
        Format the current number and return it with the advanced sequence.

        Numbers wider than the padding are kept whole.
        """
        prefix = (sequence.prefix or "").strip() or DEFAULT_INVOICE_PREFIX
        number = InvoiceNumber(prefix=prefix, number=sequence.next_number, width=self.width)

        return str(number), InvoiceSequence(
            prefix=sequence.prefix,
            next_number=sequence.next_number + 1
        )
