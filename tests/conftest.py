from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.database.database import MemoryKeyValueStore
from storefront.handlers import auth_handlers
from storefront.models.models import Product
from storefront.store.cart_store import CartStore

AUTHORIZED_USER_ID = 4242


@pytest.fixture
def storage():
    return MemoryKeyValueStore()


@pytest.fixture
def store(storage):
    return CartStore(storage)


@pytest.fixture
def phone():
    return Product(name="Phone", price=Decimal("10"), image="phone")


@pytest.fixture
def case():
    return Product(name="Case", price=Decimal("5"), image="case")


@pytest.fixture
def authorized(monkeypatch):
    monkeypatch.setattr(auth_handlers, "AUTHORIZED_USERS_IDS", {AUTHORIZED_USER_ID})
    monkeypatch.setattr(auth_handlers, "AUTHORIZED_USERS_USERNAMES", set())


@pytest.fixture
def context(store):
    context = MagicMock()
    context.bot_data = {"store": store}
    context.bot.set_my_commands = AsyncMock()
    return context


def _user(update, user_id, username):
    update.effective_user.id = user_id
    update.effective_user.username = username


def make_command_update(user_id=AUTHORIZED_USER_ID, username=None):
    update = MagicMock()
    _user(update, user_id, username)
    update.callback_query = None
    update.message.reply_text = AsyncMock()
    update.effective_message = update.message
    return update


def make_callback_update(data, user_id=AUTHORIZED_USER_ID, username=None):
    update = MagicMock()
    _user(update, user_id, username)
    query = update.callback_query
    query.data = data
    query.answer = AsyncMock()
    query.message.reply_text = AsyncMock()
    query.message.reply_photo = AsyncMock()
    update.effective_message = query.message
    return update


def replies(message):
    """Text of every reply_text call made on a mocked message."""
    return [call.args[0] for call in message.reply_text.await_args_list]
