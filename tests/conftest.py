"""Shared fixtures: a small backend export."""

import json

import pytest


@pytest.fixture
def snapshot_data():
    """Raw snapshot rows for one user and one group."""
    return {
        "user_id": "u-alice",
        "transactions": [
            {
                "id": 1,
                "date": "2025-03-02",
                "merchant": "KFC",
                "amount": 60,
                "category": "Food",
                "type": "debit",
            },
            {
                "id": 2,
                "date": "2025-03-03",
                "merchant": "Landlord",
                "amount": 950,
                "category": "Rent",
                "type": "debit",
            },
            {
                "id": 3,
                "date": "2025-03-04",
                "merchant": "Uber trip",
                "amount": 25.5,
                "category": "",
                "type": "debit",
            },
            {
                "id": 4,
                "date": "2025-03-01",
                "merchant": "Payroll",
                "amount": 3000,
                "category": "Salary",
                "type": "credit",
            },
            {
                "id": 5,
                "date": "2025-02-14",
                "merchant": "Restaurant",
                "amount": 45,
                "category": "Food",
                "type": "debit",
            },
        ],
        "categories": [
            {"id": 1, "name": "Food"},
            {"id": 2, "name": "Rent"},
            {"id": 3, "name": "Transport"},
        ],
        "budgets": {"budgets": {"1": 100, "2": 1000, "3": 20, "42": 75}},
        "groups": [
            {
                "id": "g1",
                "name": "Flatmates",
                "owner_id": "u-alice",
                "member_ids": ["u-alice", "u-bob", "u-carol"],
                "members": [
                    {"uid": "u-alice", "display_name": "Alice"},
                    {"uid": "u-bob", "display_name": "Bob"},
                    {"uid": "u-carol", "display_name": "Carol"},
                ],
            }
        ],
        "group_expenses": [
            {
                "id": "e1",
                "group_id": "g1",
                "title": "Dinner",
                "amount": 90,
                "paid_by": "u-alice",
                "split_between": ["u-alice", "u-bob", "u-carol"],
            },
            {
                "id": "e2",
                "group_id": "g1",
                "title": "Cleaning supplies",
                "amount": 12,
                "paid_by": "u-bob",
                "split_between": [],
            },
            {
                "id": "e3",
                "group_id": "other",
                "title": "Elsewhere",
                "amount": 500,
                "paid_by": "u-zed",
                "split_between": ["u-alice"],
            },
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    """The snapshot rows written to a JSON file."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path
