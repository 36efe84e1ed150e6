"""Context-carrying access to the bd store executable."""

from .client import StoreClient, provision_rig
from .context import ContextKind, StoreContext
from .invoker import InvocationResult, StoreInvoker
