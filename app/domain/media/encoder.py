import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Optional, Tuple, Union

DATA_URI_SCHEME = "data:"
BASE64_MARKER = ";base64,"


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """
    바이너리 미디어 → data URI 문자열

    Args:
        data: 이미지 스냅샷 또는 비디오 blob
        mime_type: 예) image/jpeg, video/webm

    Returns:
        "data:<mime>;base64,<payload>"
    """
    payload = base64.b64encode(data).decode("ascii")
    return f"{DATA_URI_SCHEME}{mime_type}{BASE64_MARKER}{payload}"


def decode_data_uri(uri: str) -> Tuple[bytes, str]:
    """data URI → (bytes, mime_type). 형식이 맞지 않으면 ValueError"""
    if not uri.startswith(DATA_URI_SCHEME) or BASE64_MARKER not in uri:
        raise ValueError("not a base64 data URI")

    header, payload = uri[len(DATA_URI_SCHEME):].split(BASE64_MARKER, 1)
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
    return data, header


def encode_file(path: Union[str, Path], mime_type: Optional[str] = None) -> str:
    """파일을 읽어 data URI로 변환 (mime_type 미지정 시 확장자로 추정)"""
    path = Path(path)
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None:
            raise ValueError(f"MIME 타입을 추정할 수 없습니다: {path.name}")
    return encode_data_uri(path.read_bytes(), mime_type)
