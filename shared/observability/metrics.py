from prometheus_client import Counter, Gauge

# Business Metrics
shop_cart_additions_total = Counter(
    "shop_cart_additions_total",
    "Total add-to-cart requests accepted"
)

shop_chat_replies_total = Counter(
    "shop_chat_replies_total",
    "Total chatbot replies",
    ["rule"] # Labels: 'greeting', 'cheapest', ..., 'search', 'error'
)

shop_conversation_messages_total = Counter(
    "shop_conversation_messages_total",
    "Total buyer/seller messages stored",
    ["sender_type"] # Labels: 'buyer', 'seller'
)

shop_conversations_started_total = Counter(
    "shop_conversations_started_total",
    "Total conversations created"
)

shop_conversations_expired_total = Counter(
    "shop_conversations_expired_total",
    "Total conversations deleted by the expiry sweep"
)

shop_active_conversations = Gauge(
    "shop_active_conversations",
    "Active conversations with at least one message, as last listed"
)
