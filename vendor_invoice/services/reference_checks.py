"""Referential checks against foreign ERP entities."""
from abc import ABC, abstractmethod


class ReferenceChecker(ABC):
    """
    Answers whether foreign entities referenced by an invoice exist.

    Implementations backed by a real ERP lookup plug in here; the
    validator only depends on this interface.
    """

    @abstractmethod
    def business_partner_exists(self, partner_id: str) -> bool:
        """Return True if the business partner (t_ifbp) is known."""
        pass

    @abstractmethod
    def cost_center_exists(self, cost_center: str) -> bool:
        """Return True if the cost center (t_cprj) is known."""
        pass


class PlaceholderReferenceChecker(ReferenceChecker):
    """Accepts any non-blank reference."""

    def business_partner_exists(self, partner_id: str) -> bool:
        return bool(partner_id and partner_id.strip())

    def cost_center_exists(self, cost_center: str) -> bool:
        return bool(cost_center and cost_center.strip())
