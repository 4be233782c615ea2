from .setup import setup_observability
from .metrics import (
    shop_cart_additions_total,
    shop_chat_replies_total,
    shop_conversation_messages_total,
    shop_conversations_started_total,
    shop_conversations_expired_total,
    shop_active_conversations
)
