"""Python client for the CollabCanvas RPC endpoint."""

from collabcanvas.client.rpc_client import CanvasRpcClient, RpcError
from collabcanvas.client.session import CollaborationSession, generate_user_id

__all__ = ["CanvasRpcClient", "CollaborationSession", "RpcError", "generate_user_id"]
