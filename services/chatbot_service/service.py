from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.observability import shop_chat_replies_total
from . import rules
from .rules import ChatContext, ChatRule, Handler
from .schemas import ChatReply

logger = structlog.get_logger(__name__)


class ChatDispatcher:
    def __init__(self):
        self.rules: List[ChatRule] = []

    def add_rule(self, name: str, handler: Handler, keywords=(), phrases=(), match_all: bool = False):
        """Builder pattern: rules are evaluated in the order they are added."""
        self.rules.append(ChatRule(name, handler, keywords, phrases, match_all))
        return self

    def select(self, ctx: ChatContext) -> Optional[ChatRule]:
        """First rule, in insertion order, whose predicate accepts the message."""
        for rule in self.rules:
            if rule.matches(ctx):
                return rule
        return None

    def match(self, message: str, cart_count: int = 0) -> Optional[ChatRule]:
        return self.select(ChatContext(message, cart_count))

    async def respond(self, db: AsyncSession, message: str, cart_count: int = 0) -> ChatReply:
        ctx = ChatContext(message, cart_count)
        rule_name = "none"
        try:
            reply = None
            rule = self.select(ctx)
            if rule is not None:
                rule_name = rule.name
                reply = await rule.handler(db, ctx)
            if reply is None:
                # Nothing to show (empty catalog, no search hits): answer with the help text
                reply = rules.help_reply()
        except Exception as e:
            # The chatbot degrades instead of failing the request
            logger.error("chat_dispatch_failed", rule=rule_name, error=str(e), exc_info=True)
            await db.rollback()
            rule_name = "error"
            reply = rules.error_reply()

        shop_chat_replies_total.labels(rule=rule_name).inc()
        logger.info("chat_reply", rule=rule_name, cart_count=cart_count)
        return reply


def build_chat_dispatcher() -> ChatDispatcher:
    dispatcher = ChatDispatcher()
    dispatcher.add_rule("greeting", rules.greet, keywords=["hello", "hi"])
    dispatcher.add_rule("cheapest", rules.cheapest, keywords=["cheap", "budget"], phrases=["cheapest items"])
    dispatcher.add_rule("fastest", rules.fastest, keywords=["fast", "quick", "delivery"])
    dispatcher.add_rule("best", rules.best_rated, keywords=["best", "rated", "top"])
    dispatcher.add_rule("cart", rules.cart_status, keywords=["cart"])
    dispatcher.add_rule("electronics", rules.category("electronics", "electronics"), keywords=["electronics"])
    dispatcher.add_rule("sports", rules.category("sports", "sports products"), keywords=["sports"])
    dispatcher.add_rule("browse", rules.browse, keywords=["browse", "show", "product", "products"])
    dispatcher.add_rule("help", rules.capabilities, keywords=["help"])
    dispatcher.add_rule("search", rules.search, match_all=True)
    return dispatcher


class ChatbotService:
    def __init__(self):
        self.dispatcher = build_chat_dispatcher()

    async def process_message(self, db: AsyncSession, message: str, cart_count: int = 0) -> ChatReply:
        return await self.dispatcher.respond(db, message, cart_count)
