"""TCP server for hosting a Sevens match."""

import logging
import queue
import socket
import threading

from pydantic import BaseModel

from .events import InputEvent
from .protocol import (
    HEADER_BYTES,
    ProtocolError,
    decode_client_message,
    encode_message,
    frame,
    frame_length,
)

logger = logging.getLogger(__name__)


class HostServer:
    """TCP server that accepts the remote player.

    Inbound messages are decoded on a reader thread and put on the
    inbox as REMOTE events; a CLOSED event follows when the connection
    ends. Sending happens on the caller's thread.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 42486):
        """Initialize server.

        Args:
            host: Host address to bind to
            port: Port number
        """
        self.host = host
        self.port = port

        self._socket: socket.socket | None = None
        self._conn: socket.socket | None = None
        self._inbox: queue.Queue[InputEvent] | None = None
        self._reader: threading.Thread | None = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    @property
    def address(self) -> tuple[str, int]:
        """Bound (host, port), which resolves port 0 after start()."""
        if self._socket is None:
            return (self.host, self.port)
        return self._socket.getsockname()[:2]

    def start(self) -> None:
        """Start the server and listen for connections."""
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._socket.bind((self.host, self.port))
        self._socket.listen(1)
        logger.info(f"Server listening on {self.host}:{self.port}")

    def accept_client(self, inbox: queue.Queue[InputEvent]) -> tuple[str, int]:
        """Block until the remote player connects.

        Args:
            inbox: Queue that receives this connection's events

        Returns:
            Client address
        """
        if self._socket is None:
            raise RuntimeError("Server not started")

        conn, addr = self._socket.accept()
        logger.info(f"Connection from {addr}")

        self._conn = conn
        self._inbox = inbox
        self._reader = threading.Thread(
            target=self._read_loop,
            args=(conn, inbox),
            name="sevens-reader",
            daemon=True,
        )
        self._reader.start()
        return addr

    def _read_loop(self, conn: socket.socket, inbox: queue.Queue[InputEvent]) -> None:
        """Decode frames from the client until the connection ends."""
        reason = "connection closed"
        try:
            while True:
                length = frame_length(self._recv_exact(conn, HEADER_BYTES))
                body = self._recv_exact(conn, length)
                try:
                    message = decode_client_message(body)
                except ProtocolError as e:
                    logger.warning(f"Dropping message from client: {e}")
                    continue
                logger.debug(f"Received {message.type}")
                inbox.put(InputEvent.remote(message))
        except ProtocolError as e:
            reason = f"protocol error: {e}"
            logger.warning(f"Closing client connection: {e}")
        except (ConnectionError, OSError) as e:
            reason = str(e) or reason
            logger.info(f"Client connection ended: {reason}")
        finally:
            inbox.put(InputEvent.closed(reason))

    def _recv_exact(self, conn: socket.socket, size: int) -> bytes:
        """Receive exactly the specified number of bytes.

        Args:
            conn: Socket connection
            size: Number of bytes to receive

        Returns:
            Received bytes
        """
        data = bytearray()
        while len(data) < size:
            chunk = conn.recv(size - len(data))
            if not chunk:
                raise ConnectionError("Connection closed")
            data.extend(chunk)
        return bytes(data)

    def send(self, message: BaseModel) -> None:
        """Send a message to the client.

        Raises:
            ConnectionError: If no client is connected or the send fails
        """
        if self._conn is None:
            raise ConnectionError("Client not connected")

        try:
            self._conn.sendall(frame(encode_message(message)))
        except OSError as e:
            logger.warning(f"Send to client failed: {e}")
            if self._inbox is not None:
                self._inbox.put(InputEvent.closed(f"send failed: {e}"))
            raise ConnectionError(f"Send failed: {e}") from e

    def disconnect_client(self) -> None:
        """Close the client connection, if any."""
        if self._conn is not None:
            try:
                self._conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # Peer already gone
            self._conn.close()
            self._conn = None
            logger.info("Client disconnected")
        if self._reader is not None:
            self._reader.join(timeout=1.0)
            self._reader = None
        self._inbox = None

    def close(self) -> None:
        """Close the client connection and the server socket."""
        self.disconnect_client()

        if self._socket:
            self._socket.close()
            self._socket = None

        logger.info("Server closed")

    def __enter__(self) -> "HostServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
