import pytest
from bson import ObjectId
from fastapi import HTTPException
from unittest.mock import patch

from splitbook.services.expense_service import ExpenseService


def _expense_doc(payer, creator):
    return {
        "_id": ObjectId(),
        "amount": 10,
        "paid_by_user_id": payer,
        "created_by": creator,
        "splits": [{"user_id": payer, "amount": 10}],
    }


@pytest.mark.asyncio
async def test_delete_by_creator(mock_db):
    creator = ObjectId()
    doc = _expense_doc(ObjectId(), creator)
    mock_db.expenses.find_one.return_value = doc

    with patch("splitbook.services.expense_service.get_database", return_value=mock_db):
        deleted = await ExpenseService.delete(str(doc["_id"]), str(creator))

    assert deleted is True
    mock_db.expenses.delete_one.assert_called_once_with({"_id": doc["_id"]})


@pytest.mark.asyncio
async def test_delete_by_payer(mock_db):
    payer = ObjectId()
    doc = _expense_doc(payer, ObjectId())
    mock_db.expenses.find_one.return_value = doc

    with patch("splitbook.services.expense_service.get_database", return_value=mock_db):
        assert await ExpenseService.delete(str(doc["_id"]), str(payer)) is True


@pytest.mark.asyncio
async def test_delete_forbidden(mock_db):
    doc = _expense_doc(ObjectId(), ObjectId())
    mock_db.expenses.find_one.return_value = doc

    with patch("splitbook.services.expense_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await ExpenseService.delete(str(doc["_id"]), str(ObjectId()))

    assert exc_info.value.status_code == 403
    mock_db.expenses.delete_one.assert_not_called()


@pytest.mark.asyncio
async def test_delete_not_found(mock_db):
    with patch("splitbook.services.expense_service.get_database", return_value=mock_db):
        with pytest.raises(HTTPException) as exc_info:
            await ExpenseService.delete(str(ObjectId()), str(ObjectId()))

    assert exc_info.value.status_code == 404
