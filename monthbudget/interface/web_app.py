"""Mini README: FastAPI JSON interface for the month budget tracker.

Structure:
    * create_application - application factory wiring the month routes.
    * month routes - read a month, then one POST route per mutation.

Every request opens a fresh BudgetSession over the shared MonthStore, runs a
single command and answers with ``applied`` plus the month summary. Invalid
amounts and malformed month keys answer HTTP 400. Destructive routes only act
when the ``confirm`` form flag is set.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..budget.money import InvalidAmountError
from ..budget.months import month_key
from ..budget.views import month_summary
from ..configuration import get_settings
from ..logging_utils import get_logger
from ..session import BudgetSession
from ..storage import MonthStore, store_from_settings

LOGGER = get_logger(__name__)


def create_application(store: Optional[MonthStore] = None) -> FastAPI:
    """Create the FastAPI application; ``store`` defaults to the configured JSON file."""

    app = FastAPI(title="Month Budget", version="0.1.0")
    month_store = store or store_from_settings(get_settings())

    def open_session(month: str, confirm: bool = False) -> BudgetSession:
        try:
            return BudgetSession(month_store, month, confirm=lambda _prompt: confirm)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    def respond(session: BudgetSession, applied: bool) -> JSONResponse:
        payload: Dict[str, object] = {"applied": applied}
        payload.update(month_summary(session.month, session.record))
        return JSONResponse(payload)

    def apply(session: BudgetSession, action, *args) -> JSONResponse:
        """Run a session method, mapping rejected amounts onto HTTP 400."""

        try:
            outcome = action(*args)
        except InvalidAmountError as error:
            LOGGER.info("Rejected amount on %s: %s", session.month, error)
            raise HTTPException(status_code=400, detail=str(error)) from error
        applied = outcome is not None and outcome is not False
        LOGGER.debug("%s on %s applied=%s", action.__name__, session.month, applied)
        return respond(session, applied)

    @app.get("/")
    async def current_month() -> JSONResponse:
        """Summary of the month containing today."""

        return respond(open_session(month_key()), True)

    @app.get("/months")
    async def stored_months() -> JSONResponse:
        return JSONResponse({"months": month_store.months()})

    @app.get("/months/{month}")
    async def read_month(month: str) -> JSONResponse:
        return respond(open_session(month), True)

    @app.post("/months/{month}/income")
    async def set_income(month: str, amount: str = Form("")) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.set_income, amount)

    @app.post("/months/{month}/reset")
    async def reset_month(month: str, confirm: bool = Form(False)) -> JSONResponse:
        session = open_session(month, confirm)
        return apply(session, session.reset_month)

    @app.post("/months/{month}/fixed-charges")
    async def add_fixed_charge(
        month: str,
        name: str = Form(...),
        amount: str = Form(...),
        group: str = Form(""),
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.add_fixed_charge, name, amount, group)

    @app.post("/months/{month}/fixed-charges/{charge_id}/toggle")
    async def toggle_fixed_charge(month: str, charge_id: str) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.toggle_fixed_charge, charge_id)

    @app.post("/months/{month}/fixed-charges/{charge_id}/delete")
    async def delete_fixed_charge(
        month: str, charge_id: str, confirm: bool = Form(False)
    ) -> JSONResponse:
        session = open_session(month, confirm)
        return apply(session, session.delete_fixed_charge, charge_id)

    @app.post("/months/{month}/envelopes")
    async def add_envelope(
        month: str, name: str = Form(...), limit: str = Form("")
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.add_envelope, name, limit)

    @app.post("/months/{month}/envelopes/{envelope_id}/rename")
    async def rename_envelope(month: str, envelope_id: str, name: str = Form(...)) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.rename_envelope, envelope_id, name)

    @app.post("/months/{month}/envelopes/{envelope_id}/limit")
    async def set_envelope_limit(
        month: str, envelope_id: str, limit: str = Form(...)
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.set_envelope_limit, envelope_id, limit)

    @app.post("/months/{month}/envelopes/{envelope_id}/delete")
    async def delete_envelope(
        month: str, envelope_id: str, confirm: bool = Form(False)
    ) -> JSONResponse:
        session = open_session(month, confirm)
        return apply(session, session.delete_envelope, envelope_id)

    @app.post("/months/{month}/envelopes/{envelope_id}/entries")
    async def add_envelope_entry(
        month: str, envelope_id: str, amount: str = Form(...)
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.add_envelope_entry, envelope_id, amount)

    @app.post("/months/{month}/envelopes/{envelope_id}/entries/{entry_id}/delete")
    async def delete_envelope_entry(month: str, envelope_id: str, entry_id: str) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.delete_envelope_entry, envelope_id, entry_id)

    @app.post("/months/{month}/cumulatives")
    async def add_cumulative(month: str, name: str = Form(...)) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.add_cumulative, name)

    @app.post("/months/{month}/cumulatives/{cumulative_id}/rename")
    async def rename_cumulative(
        month: str, cumulative_id: str, name: str = Form(...)
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.rename_cumulative, cumulative_id, name)

    @app.post("/months/{month}/cumulatives/{cumulative_id}/delete")
    async def delete_cumulative(
        month: str, cumulative_id: str, confirm: bool = Form(False)
    ) -> JSONResponse:
        session = open_session(month, confirm)
        return apply(session, session.delete_cumulative, cumulative_id)

    @app.post("/months/{month}/cumulatives/{cumulative_id}/entries")
    async def add_cumulative_entry(
        month: str, cumulative_id: str, amount: str = Form(...)
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.add_cumulative_entry, cumulative_id, amount)

    @app.post("/months/{month}/cumulatives/{cumulative_id}/entries/{entry_id}/delete")
    async def delete_cumulative_entry(
        month: str, cumulative_id: str, entry_id: str
    ) -> JSONResponse:
        session = open_session(month)
        return apply(session, session.delete_cumulative_entry, cumulative_id, entry_id)

    return app
