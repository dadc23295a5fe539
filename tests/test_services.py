"""Collection services: visible ids, follow-up joins and the role audit trail."""

import pytest

from crm.core.exceptions import DocumentNotFound
from crm.services.activity_log import list_logs
from crm.services.catalog import RoleService, customer_service, invoice_service
from crm.services.crud import CollectionService, generate_visible_id
from crm.services.leads import LeadService


def test_visible_ids_follow_collection_size(store):
    leads = LeadService(store)

    first = leads.create({"name": "Ada"})
    second = leads.create({"name": "Bob"})

    assert first["visible_id"] == "L-0001"
    assert second["visible_id"] == "L-0002"
    assert first["uuid"] != second["uuid"]


def test_prefixes_per_collection(store):
    assert customer_service(store).create({"name": "Acme", "email": "a@acme.io"})["visible_id"] == "C-0001"
    assert invoice_service(store).create({"customer_id": "c1", "amount": 10})["visible_id"] == "INV-0001"
    assert generate_visible_id(store, "E", "employees") == "E-0001"


def test_unprefixed_collection_gets_no_visible_id(store):
    record = CollectionService(store, "departments").create({"name": "Sales"})

    assert "visible_id" not in record
    assert "uuid" not in record


def test_update_never_rewrites_identifiers(store):
    leads = LeadService(store)
    lead = leads.create({"name": "Ada"})

    updated = leads.update(lead["id"], {"name": "Ada L.", "visible_id": "L-9999", "uuid": "x"})

    assert updated["name"] == "Ada L."
    assert updated["visible_id"] == "L-0001"
    assert updated["uuid"] == lead["uuid"]


def test_get_missing_raises(store):
    with pytest.raises(DocumentNotFound):
        LeadService(store).get("missing")


def test_scheduled_follow_ups_are_joined_and_ordered(store):
    leads = LeadService(store)
    ada = leads.create({"name": "Ada", "phone": "555-0100"})
    bob = leads.create({"name": "Bob", "phone": "555-0199"})
    leads.add_follow_up(bob["id"], {"notes": "second", "due_date": "2024-03-02", "type": "Callback Requested"})
    leads.add_follow_up(ada["id"], {"notes": "first", "due_date": "2024-03-01"})

    scheduled = leads.list_all_follow_ups()

    assert [s["notes"] for s in scheduled] == ["first", "second"]
    assert scheduled[0]["client_name"] == "Ada"
    assert scheduled[0]["task_type"] == ""
    assert scheduled[1]["client_phone"] == "555-0199"
    assert scheduled[1]["task_type"] == "Callback Requested"


def test_follow_ups_of_deleted_leads_are_skipped(store):
    leads = LeadService(store)
    lead = leads.create({"name": "Gone"})
    leads.add_follow_up(lead["id"], {"notes": "n", "due_date": "2024-01-01"})

    leads.delete(lead["id"])

    assert leads.list_all_follow_ups() == []


def test_follow_up_requires_existing_lead(store):
    with pytest.raises(DocumentNotFound):
        LeadService(store).add_follow_up("missing", {"notes": "n", "due_date": "2024-01-01"})


def test_role_changes_are_logged(store):
    roles = RoleService(store, actor_uid="admin-1")

    role = roles.create({"name": "Sales"})
    roles.update(role["id"], {"name": "Sales Lead"})
    roles.delete(role["id"])

    logs = list_logs(store)
    assert [entry["action"] for entry in logs] == ["delete", "update", "create"]
    assert logs[2]["details"] == "Created new role: Sales"
    assert logs[0]["details"] == "Deleted role: Sales Lead"
    assert all(entry["actor_uid"] == "admin-1" for entry in logs)
