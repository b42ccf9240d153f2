"""TCP connection handling for the Sevens client."""

import logging
import socket

from pydantic import BaseModel

from sevens_client.network.protocol import (
    HEADER_BYTES,
    decode_host_message,
    encode_frame,
    frame_length,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 42486

CONNECT_TIMEOUT = 10.0


class GameConnection:
    """Manages the TCP connection to the host."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        """Initialize connection parameters.

        Args:
            host: Host name or IP address
            port: Host port number
        """
        self.host = host
        self.port = port
        self._socket: socket.socket | None = None

    def connect(self) -> None:
        """Establish TCP connection to the host."""
        if self._socket is not None:
            raise RuntimeError("Already connected")

        self._socket = socket.create_connection(
            (self.host, self.port), timeout=CONNECT_TIMEOUT
        )
        self._socket.settimeout(None)
        logger.info(f"Connected to {self.host}:{self.port}")

    def close(self) -> None:
        """Close the connection."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None
            logger.info("Connection closed")

    def send_message(self, message: BaseModel) -> None:
        """Send a request to the host."""
        if self._socket is None:
            raise RuntimeError("Not connected")
        self._socket.sendall(encode_frame(message))
        logger.debug(f"Sent {message.type}")

    def receive_message(self):
        """Block for the next message from the host.

        Raises:
            ConnectionError: If the host closed the connection
            ProtocolError: If the message cannot be decoded
        """
        length = frame_length(self._recv_exact(HEADER_BYTES))
        message = decode_host_message(self._recv_exact(length))
        logger.debug(f"Received {message.type}")
        return message

    def _recv_exact(self, size: int) -> bytes:
        """Receive exact number of bytes.

        Raises:
            ConnectionError: If connection is closed
        """
        if self._socket is None:
            raise RuntimeError("Not connected")

        data = bytearray()
        while len(data) < size:
            chunk = self._socket.recv(size - len(data))
            if not chunk:
                raise ConnectionError("Connection closed by host")
            data.extend(chunk)
        return bytes(data)

    def __enter__(self) -> "GameConnection":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
