"""User-entered link target resolution."""

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.modules.listings.domain.exceptions import InvalidLinkTargetError

_HTTP_URL = TypeAdapter(HttpUrl)


def resolve_link_target(value: str) -> str:
    """Resolve a user-entered link target into a URL string.

    内部路径必须以 /、? 或 # 开头；外部链接必须是合法的 http(s) 绝对地址。

    Raises:
        InvalidLinkTargetError: the value is neither.
    """
    target = (value or "").strip()
    if not target:
        raise InvalidLinkTargetError(value)

    if target.startswith(("/", "?", "#")):
        # "//host" 是协议相对地址，不是内部路径
        if target.startswith("//"):
            raise InvalidLinkTargetError(value)
        return target

    if not target.lower().startswith(("http://", "https://")):
        raise InvalidLinkTargetError(value)

    try:
        _HTTP_URL.validate_python(target)
    except PydanticValidationError as e:
        raise InvalidLinkTargetError(value) from e
    return target
