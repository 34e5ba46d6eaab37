from __future__ import annotations
from typing import TypedDict, Literal, Union, Dict, Any, List

# LLM 메시지 역할(문자열 리터럴 유니온)
Role = Literal["system", "user", "assistant"]


# 멀티모달 content part (text / image_url / video_url)
ContentPart = Dict[str, Any]


# 공통 LLM 메시지 스키마
class Message(TypedDict):
    role: Role
    content: Union[str, List[ContentPart]]
