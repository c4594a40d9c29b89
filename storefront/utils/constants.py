import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

BOT_TOKEN = os.getenv('BOT_TOKEN')
DATABASE_URL = os.getenv('DATABASE_URL')
STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'postgres').strip().lower()
IMAGES_DIR = os.getenv('IMAGES_DIR', 'images')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Emojis for UI elements
EMOJIS = {
    'CART': '🛒',
    'MONEY': '💰',
    'PRODUCT': '💠',
    'CONFIRM': '✅',
    'WARNING': '⚠️',
    'ERROR': '❌',
    'REMOVE': '❌',
    'ORDERS': '📜',
    'SHOPPING': '🛍️',
    'PACKAGE': '📦',
    'ARROW': '🔽',
    'WAVE': '👋',
    'PLUS': '➕',
    'BACK': '⬅️',
}

CHECKOUT_SUCCESS_MESSAGE = "Checkout successful, order saved to My orders!"


def parse_authorized_users(raw: str):
    """Split a comma separated list of user ids and @usernames."""
    ids = set()
    usernames = set()
    for user in raw.split(','):
        user = user.strip()
        if user.startswith('@'):
            usernames.add(user.lower())
        elif user.isdigit():
            ids.add(int(user))
    return ids, usernames


# Initialize authorized users from environment variables
AUTHORIZED_USERS_IDS, AUTHORIZED_USERS_USERNAMES = parse_authorized_users(os.getenv('AUTHORIZED_USERS', ''))
