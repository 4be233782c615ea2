"""
Keyword rules for the shopping chatbot.

Each rule pairs a predicate over the normalized message with an async handler.
Rules are tried in order and the first match wins. A handler returns ``None``
when it found nothing to show; the dispatcher then answers with the generic
help reply.
"""
import re
from typing import Awaitable, Callable, FrozenSet, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.service import ProductService
from .schemas import ChatReply

GREETING_REPLIES = ["Browse Products", "Cheapest Items", "Fastest Delivery", "Best Rated"]
PRODUCT_REPLIES = ["Show More", "Chat with Seller"]
FILTER_REPLIES = ["Cheapest Items", "Fastest Delivery", "Best Rated"]
CATEGORY_REPLIES = ["Cheapest Items", "Best Rated"]
ERROR_REPLIES = ["Browse Products", "Help"]

HELP_CONTENT = "I'm here to help! You can ask me to show products, find deals, or check delivery options."
ERROR_CONTENT = "I'm having trouble processing that request. Please try again!"

_WORD = re.compile(r"[a-z0-9]+")

# Single-word retries after the full-text search misses
MAX_SEARCH_WORDS = 5

# Too common to be useful as a catalog search term
STOPWORDS = frozenset({
    "the", "and", "for", "with", "you", "your", "are", "any", "can", "want",
    "need", "have", "please", "some", "what", "looking", "find", "get", "buy",
})


class ChatContext:
    """The normalized message plus what the rules need to know about the session."""

    def __init__(self, message: str, cart_count: int = 0):
        self.text = (message or "").strip().lower()
        self.words: List[str] = _WORD.findall(self.text)
        self.word_set: FrozenSet[str] = frozenset(self.words)
        self.cart_count = cart_count


Handler = Callable[[AsyncSession, ChatContext], Awaitable[Optional[ChatReply]]]


class ChatRule:
    def __init__(
        self,
        name: str,
        handler: Handler,
        keywords: Iterable[str] = (),
        phrases: Iterable[str] = (),
        match_all: bool = False,
    ):
        self.name = name
        self.handler = handler
        self.keywords = frozenset(keywords)
        self.phrases = frozenset(phrases)
        self.match_all = match_all

    def matches(self, ctx: ChatContext) -> bool:
        # Whole words only: "this" is not a greeting, "cheapest laptop" is not "cheap"
        return self.match_all or bool(self.keywords & ctx.word_set) or ctx.text in self.phrases

    def __repr__(self) -> str:
        return f"ChatRule({self.name!r})"


def help_reply() -> ChatReply:
    return ChatReply(content=HELP_CONTENT, quick_replies=FILTER_REPLIES)


def error_reply() -> ChatReply:
    return ChatReply(content=ERROR_CONTENT, quick_replies=ERROR_REPLIES)


# --- HANDLERS ---

async def greet(db: AsyncSession, ctx: ChatContext):
    return ChatReply(content="Hello! What are you looking for today?", quick_replies=GREETING_REPLIES)

async def cheapest(db: AsyncSession, ctx: ChatContext):
    products = await ProductService.list_cheapest(db)
    if not products:
        return None
    return ChatReply(
        content=f"Here are our most affordable products. The cheapest is {products[0].name} at ${products[0].price:.2f}",
        products=products,
        filter_type="cheapest",
        quick_replies=PRODUCT_REPLIES,
    )

async def fastest(db: AsyncSession, ctx: ChatContext):
    products = await ProductService.list_fastest(db)
    if not products:
        return None
    return ChatReply(
        content=f"These products can be delivered fastest from our {products[0].warehouse} warehouse!",
        products=products,
        filter_type="fastest",
        quick_replies=PRODUCT_REPLIES,
    )

async def best_rated(db: AsyncSession, ctx: ChatContext):
    products = await ProductService.list_best_rated(db)
    if not products:
        return None
    return ChatReply(
        content=f"Here are our highest-rated products. Top rated is {products[0].name} with {products[0].rating:g} stars!",
        products=products,
        filter_type="best",
        quick_replies=PRODUCT_REPLIES,
    )

async def cart_status(db: AsyncSession, ctx: ChatContext):
    if ctx.cart_count == 0:
        return ChatReply(
            content="Your cart is empty. Would you like to browse our products?",
            quick_replies=["Browse Products", "Cheapest Items"],
        )
    return ChatReply(
        content=f"You have {ctx.cart_count} item(s) in your cart.",
        quick_replies=["Chat with Seller", "Continue Shopping"],
    )

def category(name: str, label: str) -> Handler:
    async def handler(db: AsyncSession, ctx: ChatContext):
        return ChatReply(
            content=f"Here are our {label}:",
            products=await ProductService.list_by_category(db, name),
            quick_replies=CATEGORY_REPLIES,
        )
    return handler

async def browse(db: AsyncSession, ctx: ChatContext):
    products = await ProductService.list_products(db)
    return ChatReply(
        content="Here are some of our popular products:",
        products=products[:3],
        quick_replies=FILTER_REPLIES,
    )

async def capabilities(db: AsyncSession, ctx: ChatContext):
    return ChatReply(
        content="I can help you browse products, find the cheapest items, fastest delivery options, or best rated products!",
        quick_replies=FILTER_REPLIES,
    )

async def search(db: AsyncSession, ctx: ChatContext):
    # The whole message first, then each of the first few distinct words
    words = [w for w in dict.fromkeys(ctx.words) if len(w) >= 3 and w not in STOPWORDS]
    for term in dict.fromkeys([ctx.text, *words[:MAX_SEARCH_WORDS]]):
        if not term:
            continue
        results = await ProductService.search(db, term)
        if results:
            return ChatReply(
                content="I found some products matching your search:",
                products=results[:3],
                quick_replies=PRODUCT_REPLIES,
            )
    return None
