"""FastAPI routes driving participants the way a handset would."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import Exchange, get_exchange
from api.schemas import CallRequest, ParticipantResponse, StateChangeResponse
from telephony.errors import ActionNotAvailableError
from telephony.states import CallState

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.get("/participants", response_model=list[ParticipantResponse])
async def list_participants(exchange: Exchange = Depends(get_exchange)) -> list[ParticipantResponse]:
    return [ParticipantResponse.from_snapshot(p.snapshot()) for p in exchange.network]


@router.get("/participants/{address}", response_model=ParticipantResponse)
async def get_participant(address: str, exchange: Exchange = Depends(get_exchange)) -> ParticipantResponse:
    participant = exchange.network.require(address)
    return ParticipantResponse.from_snapshot(participant.snapshot())


@router.post("/participants/{address}/call", response_model=ParticipantResponse)
async def make_call(
    address: str,
    request: CallRequest,
    exchange: Exchange = Depends(get_exchange),
) -> ParticipantResponse:
    with exchange.line_action(address) as participant:
        if participant.is_busy():
            raise ActionNotAvailableError(f"Line {address} is busy ({participant.state.value}).")

        LOGGER.info("Line %s dials %s", address, request.callee)
        await participant.make_a_call(request.callee)
        return ParticipantResponse.from_snapshot(participant.snapshot())


@router.post("/participants/{address}/answer", response_model=ParticipantResponse)
async def answer_call(address: str, exchange: Exchange = Depends(get_exchange)) -> ParticipantResponse:
    with exchange.line_action(address) as participant:
        if participant.state is not CallState.RINGING:
            raise ActionNotAvailableError(f"Line {address} is not ringing.")

        await participant.answer_current_call()
        return ParticipantResponse.from_snapshot(participant.snapshot())


@router.post("/participants/{address}/reject", response_model=ParticipantResponse)
async def reject_call(address: str, exchange: Exchange = Depends(get_exchange)) -> ParticipantResponse:
    with exchange.line_action(address) as participant:
        if participant.state is not CallState.RINGING:
            raise ActionNotAvailableError(f"Line {address} is not ringing.")

        await participant.reject_current_call()
        return ParticipantResponse.from_snapshot(participant.snapshot())


@router.post("/participants/{address}/hangup", response_model=ParticipantResponse)
async def hangup_call(address: str, exchange: Exchange = Depends(get_exchange)) -> ParticipantResponse:
    with exchange.line_action(address) as participant:
        if participant.state is not CallState.TALKING:
            raise ActionNotAvailableError(f"Line {address} is not in a call.")

        await participant.hangup_current_call()
        return ParticipantResponse.from_snapshot(participant.snapshot())


@router.get("/events", response_model=list[StateChangeResponse])
async def list_events(
    limit: int = Query(default=50, ge=1, le=1000),
    exchange: Exchange = Depends(get_exchange),
) -> list[StateChangeResponse]:
    return [StateChangeResponse.from_event(event) for event in exchange.events.recent(limit)]
