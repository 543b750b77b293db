from datetime import datetime, timezone
from decimal import Decimal

import pytest
from bson import Decimal128, ObjectId
from fastapi import HTTPException
from unittest.mock import patch

from splitbook.services.group_service import GroupService
from splitbook.utils.ledger_validation import UnknownMemberError


@pytest.fixture
def people():
    return ObjectId(), ObjectId(), ObjectId()


@pytest.fixture
def group_doc(people):
    alice, bob, carol = people
    return {
        "_id": ObjectId(),
        "name": "Trip",
        "description": "Lisbon",
        "members": [
            {"user_id": alice, "role": "admin"},
            {"user_id": bob, "role": "member"},
            {"user_id": carol, "role": "member"},
        ],
    }


@pytest.fixture
def user_docs(people):
    alice, bob, carol = people
    return [
        {"_id": carol, "name": "Carol", "email": "carol@example.com"},
        {"_id": alice, "name": "Alice", "email": "alice@example.com"},
        {"_id": bob, "name": "Bob", "email": "bob@example.com", "image_url": "http://img/bob"},
    ]


@pytest.mark.asyncio
async def test_get_group_expenses_balances(mock_db, find_result, people, group_doc, user_docs):
    alice, bob, carol = people
    group_id = group_doc["_id"]

    mock_db.groups.find_one.return_value = group_doc
    find_result(mock_db.users, user_docs)
    find_result(mock_db.expenses, [{
        "_id": ObjectId(),
        "description": "Dinner",
        "amount": Decimal128("60"),
        "paid_by_user_id": alice,
        "splits": [
            {"user_id": alice, "amount": 20.0, "settled": False},
            {"user_id": bob, "amount": 20.0, "settled": False},
            {"user_id": carol, "amount": 20.0, "settled": False},
        ],
        "group_id": group_id,
        "date": datetime(2024, 5, 1, tzinfo=timezone.utc),
    }])
    find_result(mock_db.settlements, [{
        "_id": ObjectId(),
        "amount": 10,
        "paid_by_user_id": bob,
        "received_by_user_id": alice,
        "group_id": group_id,
    }])

    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        result = await GroupService.get_group_expenses(str(group_id), str(alice))

    assert result.group.name == "Trip"
    # Members keep group order, not the order users came back in
    assert [m.name for m in result.members] == ["Alice", "Bob", "Carol"]
    assert result.members[0].role == "admin"
    assert result.user_lookup_map[str(bob)].image_url == "http://img/bob"

    balances = {b.id: b for b in result.balances}
    assert balances[str(alice)].total_balance == Decimal("30")
    assert balances[str(bob)].total_balance == Decimal("-10")
    assert balances[str(carol)].total_balance == Decimal("-20")
    assert [(e.to, e.amount) for e in balances[str(bob)].owes] == [(str(alice), Decimal("10"))]
    assert {e.from_ for e in balances[str(alice)].owed_by} == {str(bob), str(carol)}

    mock_db.expenses.find.assert_called_once_with({"group_id": group_id})


@pytest.mark.asyncio
async def test_get_group_expenses_not_found(mock_db):
    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await GroupService.get_group_expenses(str(ObjectId()), str(ObjectId()))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_group_expenses_invalid_id(mock_db):
    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await GroupService.get_group_expenses("not-an-id", str(ObjectId()))

    assert exc_info.value.status_code == 404
    mock_db.groups.find_one.assert_not_called()


@pytest.mark.asyncio
async def test_get_group_expenses_requires_membership(mock_db, group_doc):
    mock_db.groups.find_one.return_value = group_doc

    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await GroupService.get_group_expenses(str(group_doc["_id"]), str(ObjectId()))

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_get_group_expenses_missing_user(mock_db, find_result, people, group_doc, user_docs):
    mock_db.groups.find_one.return_value = group_doc
    find_result(mock_db.users, user_docs[:2])

    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await GroupService.get_group_expenses(str(group_doc["_id"]), str(people[0]))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_group_expenses_rejects_outsider_records(mock_db, find_result, people, group_doc, user_docs):
    alice = people[0]
    mock_db.groups.find_one.return_value = group_doc
    find_result(mock_db.users, user_docs)
    find_result(mock_db.settlements, [{
        "_id": ObjectId(),
        "amount": 5,
        "paid_by_user_id": ObjectId(),  # left the group
        "received_by_user_id": alice,
        "group_id": group_doc["_id"],
    }])

    with patch("splitbook.services.group_service.get_database", return_value=mock_db):
        with pytest.raises(UnknownMemberError):
            await GroupService.get_group_expenses(str(group_doc["_id"]), str(alice))
