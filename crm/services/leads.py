"""
Lead and Follow-Up Service Module

Leads are ordinary collection records with L- visible ids. Follow-ups live
in their own collection and point back at a lead through `lead_id`.
"""
from typing import Any, Dict, List

from crm.db.store import DocumentStore
from crm.services.crud import CollectionService

LEADS_COLLECTION = "leads"
FOLLOW_UPS_COLLECTION = "follow_ups"

Record = Dict[str, Any]


class LeadService(CollectionService):
    def __init__(self, store: DocumentStore):
        super().__init__(store, LEADS_COLLECTION, prefix="L", order_by="name")
        self.follow_ups = CollectionService(store, FOLLOW_UPS_COLLECTION, order_by="due_date")

    def list_follow_ups(self, lead_id: str) -> List[Record]:
        return self.store.where(FOLLOW_UPS_COLLECTION, "lead_id", lead_id)

    def list_all_follow_ups(self) -> List[Record]:
        """
        Every follow-up ordered by due date, joined with its lead's name and phone.

        Follow-ups whose lead no longer exists are left out.
        """
        leads = {lead["id"]: lead for lead in self.store.list_all(LEADS_COLLECTION)}
        scheduled = []
        for follow_up in self.follow_ups.list():
            lead = leads.get(follow_up.get("lead_id"))
            if lead is None:
                continue
            scheduled.append({
                **follow_up,
                "client_name": lead.get("name"),
                "client_phone": lead.get("phone"),
                "task_type": follow_up.get("type") or "",
            })
        return scheduled

    def add_follow_up(self, lead_id: str, data: Record) -> Record:
        # Raises DocumentNotFound for an unknown lead
        self.get(lead_id)
        return self.follow_ups.create({**data, "lead_id": lead_id})

    def update_follow_up(self, follow_up_id: str, updates: Record) -> Record:
        updates = {k: v for k, v in updates.items() if k != "lead_id"}
        return self.follow_ups.update(follow_up_id, updates)

    def delete_follow_up(self, follow_up_id: str) -> None:
        self.follow_ups.delete(follow_up_id)
