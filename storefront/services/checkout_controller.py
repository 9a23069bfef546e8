"""
Checkout Controller

Sequences a checkout attempt: validate the guest form, price the selection,
resolve the payment method, request a gateway session, persist the hand-off
and finally hand back the URL the shopper must be redirected to.

All phase changes go through `transition`, a pure reducer over
`CheckoutState` and the event types below.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from ..database.drafts import CheckoutDraftStore, HandoffStore
from ..models.forms import GuestForm, Identity, FormErrors
from ..models.payment import CheckoutSession, PaymentMethod
from ..models.selection import SelectionItem, PricingBreakdown
from .payment_selector import PaymentMethodSelector
from .pricing import compute_breakdown, FREE_SHIPPING_THRESHOLD, FLAT_HANDLING_FEE
from .session_client import CheckoutSessionClient, SessionClientError, build_customer_payload
from .validation import validate, clear_field_error

logger = logging.getLogger(__name__)

GENERIC_FAILURE_ALERT = "Something went wrong"
NO_URL_ALERT = "Failed to create checkout session"


class CheckoutPhase(str, Enum):
    """Where a checkout attempt currently is"""
    IDLE = "idle"
    VALIDATING = "validating"
    COMPUTING_TOTALS = "computing_totals"
    AWAITING_SESSION = "awaiting_session"
    PERSISTING_HANDOFF = "persisting_handoff"
    REDIRECTING = "redirecting"


@dataclass(frozen=True)
class CheckoutState:
    """Snapshot of the checkout flow"""
    phase: CheckoutPhase = CheckoutPhase.IDLE
    errors: FormErrors = field(default_factory=dict)
    breakdown: Optional[PricingBreakdown] = None
    notice: Optional[str] = None
    alert: Optional[str] = None
    checkout_id: Optional[str] = None
    checkout_url: Optional[str] = None
    redirect_url: Optional[str] = None

    @property
    def submit_enabled(self) -> bool:
        return self.phase == CheckoutPhase.IDLE

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "errors": dict(self.errors),
            "breakdown": self.breakdown.model_dump() if self.breakdown else None,
            "notice": self.notice,
            "alert": self.alert,
            "checkout_id": self.checkout_id,
            "redirect_url": self.redirect_url,
            "submit_enabled": self.submit_enabled,
        }


# ==================== Events ====================

@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class ValidationFailed:
    errors: FormErrors


@dataclass(frozen=True)
class ValidationPassed:
    breakdown: PricingBreakdown


@dataclass(frozen=True)
class MethodDeferred:
    notice: str


@dataclass(frozen=True)
class SessionRequested:
    pass


@dataclass(frozen=True)
class SessionCreated:
    session: CheckoutSession


@dataclass(frozen=True)
class SessionFailed:
    alert: str


@dataclass(frozen=True)
class HandoffPersisted:
    pass


CheckoutEvent = Union[
    Submit,
    ValidationFailed,
    ValidationPassed,
    MethodDeferred,
    SessionRequested,
    SessionCreated,
    SessionFailed,
    HandoffPersisted,
]


class InvalidTransition(Exception):
    """An event arrived in a phase that does not accept it"""

    def __init__(self, phase: CheckoutPhase, event: CheckoutEvent):
        super().__init__(f"{type(event).__name__} not allowed in phase '{phase.value}'")
        self.phase = phase
        self.event = event


class SubmitInProgress(Exception):
    """A submit arrived while a session request was still pending"""
    pass


def transition(state: CheckoutState, event: CheckoutEvent) -> CheckoutState:
    """Apply one event to a checkout state"""
    phase = state.phase

    if phase == CheckoutPhase.IDLE and isinstance(event, Submit):
        return replace(state, phase=CheckoutPhase.VALIDATING, notice=None, alert=None)

    if phase == CheckoutPhase.VALIDATING:
        if isinstance(event, ValidationFailed):
            return replace(state, phase=CheckoutPhase.IDLE, errors=dict(event.errors))
        if isinstance(event, ValidationPassed):
            return replace(
                state,
                phase=CheckoutPhase.COMPUTING_TOTALS,
                errors={},
                breakdown=event.breakdown,
            )

    if phase == CheckoutPhase.COMPUTING_TOTALS:
        if isinstance(event, MethodDeferred):
            return replace(state, phase=CheckoutPhase.IDLE, notice=event.notice)
        if isinstance(event, SessionRequested):
            return replace(state, phase=CheckoutPhase.AWAITING_SESSION)

    if phase == CheckoutPhase.AWAITING_SESSION:
        if isinstance(event, SessionCreated):
            if not event.session.checkout_url:
                raise InvalidTransition(phase, event)
            return replace(
                state,
                phase=CheckoutPhase.PERSISTING_HANDOFF,
                checkout_id=event.session.checkout_id,
                checkout_url=event.session.checkout_url,
            )
        if isinstance(event, SessionFailed):
            return replace(state, phase=CheckoutPhase.IDLE, alert=event.alert)

    if phase == CheckoutPhase.PERSISTING_HANDOFF:
        if isinstance(event, HandoffPersisted):
            return replace(state, phase=CheckoutPhase.REDIRECTING, redirect_url=state.checkout_url)
        if isinstance(event, SessionFailed):
            return replace(
                state,
                phase=CheckoutPhase.IDLE,
                alert=event.alert,
                checkout_id=None,
                checkout_url=None,
            )

    raise InvalidTransition(phase, event)


class CheckoutController:
    """
    Drives one shopper's checkout through `transition`.

    The guest path passes a form and owns the persisted draft; the direct
    "buy now" path passes no form and never touches the draft.
    """

    def __init__(
        self,
        session_client: CheckoutSessionClient,
        draft_store: CheckoutDraftStore,
        handoff_store: HandoffStore,
        selector: Optional[PaymentMethodSelector] = None,
        free_shipping_threshold: float = FREE_SHIPPING_THRESHOLD,
        handling_fee: float = FLAT_HANDLING_FEE,
    ):
        self.session_client = session_client
        self.draft_store = draft_store
        self.handoff_store = handoff_store
        self.selector = selector or PaymentMethodSelector()
        self.free_shipping_threshold = free_shipping_threshold
        self.handling_fee = handling_fee
        self.state = CheckoutState()

    @property
    def submit_enabled(self) -> bool:
        return self.state.submit_enabled

    def _dispatch(self, event: CheckoutEvent) -> CheckoutState:
        previous = self.state.phase
        self.state = transition(self.state, event)
        logger.debug(f"Checkout {previous.value} -> {self.state.phase.value} on {type(event).__name__}")
        return self.state

    def select_method(self, method: PaymentMethod) -> None:
        """Change payment method; clears any notice on screen"""
        self.selector.select(method)
        self.state = replace(self.state, notice=None)

    def set_field(self, form: GuestForm, name: str, value: str) -> GuestForm:
        """Update one form field and drop its stale error"""
        if name not in GuestForm.model_fields:
            raise ValueError(f"Unknown form field: {name}")
        self.state = replace(self.state, errors=clear_field_error(self.state.errors, name))
        return form.model_copy(update={name: value})

    async def submit(
        self,
        selection: SelectionItem,
        form: Optional[GuestForm] = None,
        identity: Optional[Identity] = None,
    ) -> CheckoutState:
        """
        Run one checkout attempt.

        Returns the resulting state: IDLE with errors, a notice or an alert
        when the attempt stops early, or REDIRECTING with `redirect_url`
        set once the session is open and the hand-off is persisted.
        """
        if self.state.phase == CheckoutPhase.REDIRECTING:
            # The previous attempt already left for the gateway
            self.reset()
        if not self.submit_enabled:
            raise SubmitInProgress(f"Checkout is {self.state.phase.value}")

        self._dispatch(Submit())

        errors = validate(form) if form is not None else {}
        if errors:
            logger.info(f"Checkout form invalid: {sorted(errors)}")
            return self._dispatch(ValidationFailed(errors))

        breakdown = compute_breakdown(
            selection.product.price,
            selection.quantity,
            threshold=self.free_shipping_threshold,
            flat_fee=self.handling_fee,
        )
        self._dispatch(ValidationPassed(breakdown))

        method = self.selector.selected_method
        if self.selector.is_deferred(method):
            notice = self.selector.advisory_for(method)
            self.selector.set_notice(notice)
            return self._dispatch(MethodDeferred(notice))

        self._dispatch(SessionRequested())
        try:
            session = await self.session_client.create_session(
                amount=breakdown.total,
                description=selection.product.name,
                method=method,
                customer=build_customer_payload(identity=identity, form=form),
                access_token=identity.access_token if identity else None,
            )
        except SessionClientError as e:
            logger.error(f"Checkout session request failed: {e}")
            # Direct purchases report a rejected request the same way as a missing URL
            if form is None and e.status_code is not None:
                return self._dispatch(SessionFailed(NO_URL_ALERT))
            return self._dispatch(SessionFailed(GENERIC_FAILURE_ALERT))
        except asyncio.CancelledError:
            # Shopper left before the backend answered
            self._dispatch(SessionFailed(GENERIC_FAILURE_ALERT))
            raise
        except Exception:
            logger.exception("Unexpected error while requesting checkout session")
            return self._dispatch(SessionFailed(GENERIC_FAILURE_ALERT))

        if not session.checkout_url:
            return self._dispatch(SessionFailed(NO_URL_ALERT))

        self._dispatch(SessionCreated(session))
        try:
            if session.checkout_id:
                self.handoff_store.save_checkout_id(session.checkout_id)
            if form is not None:
                self.draft_store.clear()
        except OSError:
            logger.exception(f"Could not persist hand-off for session {session.checkout_id}")
            return self._dispatch(SessionFailed(GENERIC_FAILURE_ALERT))
        state = self._dispatch(HandoffPersisted())
        logger.info(f"Redirecting shopper to gateway for session {session.checkout_id}")
        return state

    def reset(self) -> CheckoutState:
        """Start over after a redirect or an abandoned attempt"""
        self.state = CheckoutState()
        return self.state
