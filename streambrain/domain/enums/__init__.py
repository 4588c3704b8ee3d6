from streambrain.domain.enums.codec_type import CodecType
from streambrain.domain.enums.delivery_protocol import DeliveryProtocol, PROTOCOL_PRIORITY
from streambrain.domain.enums.stream_action import StreamAction
__all__ = [
    "CodecType",
    "DeliveryProtocol",
    "PROTOCOL_PRIORITY",
    "StreamAction",
]
