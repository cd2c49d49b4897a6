"""DSA tutor chatbot API endpoints.

Routes:
- POST /chatbot/chat - Reply to a tutor chat message (rate limited)

Dependencies: dsa_assistant.application.services.tutor_chat_service
System role: Tutor chatbot HTTP API
"""

from fastapi import APIRouter, Depends

from dsa_assistant.api.deps import enforce_rate_limit, get_tutor_chat_service
from dsa_assistant.application.services import TutorChatService
from dsa_assistant.models.chat import ChatMessageRequest, ChatMessageResponse

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post(
    "/chat",
    response_model=ChatMessageResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def chat(
    request: ChatMessageRequest,
    tutor_service: TutorChatService = Depends(get_tutor_chat_service),
) -> ChatMessageResponse:
    """Send a message to the DSA tutor."""
    return await tutor_service.process_message(request.message)
