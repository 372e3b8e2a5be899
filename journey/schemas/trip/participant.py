from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID


class ParticipantOut(BaseModel):
    id: UUID
    trip_id: UUID
    name: Optional[str] = None
    email: str
    is_confirmed: bool

    model_config = {
        "from_attributes": True
    }


class ParticipantsResponse(BaseModel):
    participants: List[ParticipantOut]
