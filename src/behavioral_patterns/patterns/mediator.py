"""
Mediator pattern - a chat room coordinating participants.

Participants never hold references to each other. They only talk to the
room, which decides who receives what.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import (
    ParticipantMutedError,
    ParticipantNotFoundError,
    ValidationError,
)

SYSTEM_SENDER = "system"


class ChatMessage(BaseModel):
    """A message as delivered by the room."""
    model_config = ConfigDict(frozen=True)

    sender: str
    text: str
    recipient: Optional[str] = None
    sent_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_direct(self) -> bool:
        return self.recipient is not None

    def __str__(self) -> str:
        target = f" -> {self.recipient}" if self.recipient else ""
        return f"[{self.sender}{target}] {self.text}"


class ChatMediator(ABC):
    """Mediator interface."""

    @abstractmethod
    def register(self, participant: "Participant") -> None: ...

    @abstractmethod
    def unregister(self, participant: "Participant") -> None: ...

    @abstractmethod
    def send(self, sender: "Participant", text: str, recipient: Optional[str] = None) -> ChatMessage: ...


class ChatRoom(ChatMediator):
    """Concrete mediator: routes broadcasts and direct messages."""

    def __init__(self, name: str):
        self.name = name
        self._participants: Dict[str, "Participant"] = {}
        self._muted: Set[str] = set()
        self.history: List[ChatMessage] = []

    @property
    def participants(self) -> List[str]:
        return list(self._participants)

    def register(self, participant: "Participant") -> None:
        if participant.name == SYSTEM_SENDER:
            raise ValidationError(f"'{SYSTEM_SENDER}' is a reserved name")
        if participant.name in self._participants:
            raise ValidationError(f"{participant.name} is already in {self.name}")
        self._participants[participant.name] = participant
        self._notice(f"{participant.name} joined", exclude=participant.name)

    def unregister(self, participant: "Participant") -> None:
        if self._participants.get(participant.name) is not participant:
            raise ParticipantNotFoundError(participant.name)
        del self._participants[participant.name]
        self._muted.discard(participant.name)
        self._notice(f"{participant.name} left")

    def send(self, sender: "Participant", text: str, recipient: Optional[str] = None) -> ChatMessage:
        if self._participants.get(sender.name) is not sender:
            raise ParticipantNotFoundError(sender.name)
        if sender.name in self._muted:
            raise ParticipantMutedError(sender.name)
        if not text or not text.strip():
            raise ValidationError("Message text cannot be empty")

        message = ChatMessage(sender=sender.name, text=text.strip(), recipient=recipient)
        if recipient is not None:
            target = self._participants.get(recipient)
            if target is None:
                raise ParticipantNotFoundError(recipient)
            target.receive(message)
        else:
            for name, participant in self._participants.items():
                if name != sender.name:
                    participant.receive(message)
        self.history.append(message)
        return message

    def mute(self, name: str) -> None:
        if name not in self._participants:
            raise ParticipantNotFoundError(name)
        self._muted.add(name)

    def unmute(self, name: str) -> None:
        if name not in self._participants:
            raise ParticipantNotFoundError(name)
        self._muted.discard(name)

    def _notice(self, text: str, exclude: Optional[str] = None) -> None:
        message = ChatMessage(sender=SYSTEM_SENDER, text=text)
        for name, participant in self._participants.items():
            if name != exclude:
                participant.receive(message)
        self.history.append(message)


class Participant:
    """Colleague: knows only its mediator."""

    def __init__(self, name: str):
        if not name or not name.strip():
            raise ValidationError("Participant name cannot be empty")
        self.name = name.strip()
        self.inbox: List[ChatMessage] = []
        self._room: Optional[ChatMediator] = None

    @property
    def room(self) -> Optional[ChatMediator]:
        return self._room

    def join(self, room: ChatMediator) -> None:
        if self._room is not None:
            raise ValidationError(f"{self.name} is already in a room")
        room.register(self)
        self._room = room

    def leave(self) -> None:
        if self._room is None:
            raise ValidationError(f"{self.name} is not in a room")
        self._room.unregister(self)
        self._room = None

    def send(self, text: str, to: Optional[str] = None) -> ChatMessage:
        if self._room is None:
            raise ValidationError(f"{self.name} is not in a room")
        return self._room.send(self, text, recipient=to)

    def receive(self, message: ChatMessage) -> None:
        self.inbox.append(message)


@pattern_demo("mediator")
def demo() -> List[str]:
    """Three participants exchange broadcast and direct messages."""
    room = ChatRoom("design-review")
    ana, ben, chen = Participant("ana"), Participant("ben"), Participant("chen")
    for participant in (ana, ben, chen):
        participant.join(room)

    ana.send("Strategy or State for the pricing rules?")
    ben.send("State, the rules change with the order status", to="ana")
    room.mute("chen")
    rejected = ""
    try:
        chen.send("Both!")
    except ParticipantMutedError as e:
        rejected = str(e)
    chen.leave()

    lines = [str(message) for message in room.history]
    lines.append(f"rejected: {rejected}")
    lines.append(f"inboxes: ana={len(ana.inbox)} ben={len(ben.inbox)} chen={len(chen.inbox)}")
    return lines
