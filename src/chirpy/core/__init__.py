"""
=============================================================================
NETWORKING CORE
=============================================================================

    SocketServer   listening socket and accept loop
         │
         ▼
    Connection     one client socket, buffered request-at-a-time reads
         │
         ▼
    ThreadPool     workers that run each connection's keep-alive loop

None of these know about HTTP semantics beyond finding where a request
ends; parsing and dispatch live in chirpy.http.

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer
from .thread_pool import ThreadPool, Task, Worker, WorkerState

__all__ = [
    "Connection",
    "ConnectionState",
    "SocketServer",
    "ThreadPool",
    "Task",
    "Worker",
    "WorkerState",
]
