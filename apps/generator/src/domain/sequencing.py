"""
Event-sequencing state machine.

A user's journey is driven by a small mutable context (cart flags, cart
size, current session) and an ordered table of transition rules. Rules are
evaluated top to bottom and the first one that fires decides the next
event type; the order encodes causality:

    add_itemToCart -> view_cart -> checkout -> transaction_complete

while any state may fall back to passive browsing.
"""

from dataclasses import dataclass
from datetime import datetime
from random import Random
from typing import Callable, Optional, Tuple

from apps.generator.src.core.config import EventGenerationSettings
from apps.generator.src.domain.models import (
    ENTRY_EVENTS,
    PASSIVE_BROWSING_EVENTS,
    EventType,
)


@dataclass
class EventGenerationContext:
    """
    Per-user generation state, created fresh for every sequence.

    Invariant: `cart_items >= 0`.
    """

    session_id: str
    base_timestamp: datetime
    has_added_to_cart: bool = False
    has_viewed_cart: bool = False
    has_checked_out: bool = False
    has_completed_transaction: bool = False
    cart_items: int = 0
    # Milliseconds elapsed since `base_timestamp` in the current session.
    elapsed_ms: int = 0

    def start_session(self, session_id: str, base_timestamp: datetime) -> None:
        self.session_id = session_id
        self.base_timestamp = base_timestamp
        self.elapsed_ms = 0


@dataclass(frozen=True)
class TransitionRule:
    """
    One row of the transition table.

    Attributes:
        name: Short label used in logs and tests.
        guard: Precondition on the context.
        probability: Selects the Bernoulli probability from the settings;
            None means the rule fires whenever the guard holds.
        emits: Event type produced; None means "pick a passive browsing event".
    """

    name: str
    guard: Callable[[EventGenerationContext], bool]
    probability: Optional[Callable[[EventGenerationSettings], float]]
    emits: Optional[EventType]


TRANSITION_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(
        name="transaction_after_checkout",
        guard=lambda ctx: ctx.has_checked_out and not ctx.has_completed_transaction,
        probability=lambda cfg: cfg.transaction_after_checkout_probability,
        emits=EventType.TRANSACTION_COMPLETE,
    ),
    TransitionRule(
        name="browse_after_checkout",
        guard=lambda ctx: ctx.has_checked_out,
        probability=None,
        emits=None,
    ),
    TransitionRule(
        name="checkout_after_view_cart",
        guard=lambda ctx: ctx.has_viewed_cart,
        probability=lambda cfg: cfg.checkout_after_view_cart_probability,
        emits=EventType.CHECKOUT,
    ),
    TransitionRule(
        name="view_cart_after_add",
        guard=lambda ctx: ctx.has_added_to_cart,
        probability=lambda cfg: cfg.view_cart_after_add_probability,
        emits=EventType.VIEW_CART,
    ),
    TransitionRule(
        name="remove_from_cart",
        guard=lambda ctx: ctx.has_added_to_cart,
        probability=lambda cfg: cfg.remove_from_cart_probability,
        emits=EventType.REMOVE_ITEM_FROM_CART,
    ),
    TransitionRule(
        name="add_to_cart",
        guard=lambda ctx: True,
        probability=lambda cfg: cfg.add_to_cart_probability,
        emits=EventType.ADD_ITEM_TO_CART,
    ),
)


def bernoulli(rng: Random, probability: float) -> bool:
    """True with the given probability; 1.0 always succeeds, 0.0 never does."""
    return rng.random() < probability


def next_event_type(
    context: EventGenerationContext,
    index: int,
    cfg: EventGenerationSettings,
    rng: Random,
) -> EventType:
    """
    Pick the event type for position `index` of a user's sequence.

    Only reads the context; state updates belong to `apply_event`.
    """
    if index == 0:
        return rng.choice(ENTRY_EVENTS)

    for rule in TRANSITION_RULES:
        if not rule.guard(context):
            continue
        if rule.probability is not None and not bernoulli(rng, rule.probability(cfg)):
            continue
        if rule.emits is None:
            break
        return rule.emits

    return rng.choice(PASSIVE_BROWSING_EVENTS)


def apply_event(context: EventGenerationContext, event_type: EventType) -> None:
    """Update the context after `event_type` has been chosen."""
    if event_type is EventType.ADD_ITEM_TO_CART:
        context.has_added_to_cart = True
        context.cart_items += 1
    elif event_type is EventType.REMOVE_ITEM_FROM_CART:
        context.cart_items = max(0, context.cart_items - 1)
        if context.cart_items == 0:
            context.has_added_to_cart = False
    elif event_type is EventType.VIEW_CART:
        context.has_viewed_cart = True
    elif event_type is EventType.CHECKOUT:
        context.has_checked_out = True
    elif event_type is EventType.TRANSACTION_COMPLETE:
        context.has_completed_transaction = True
