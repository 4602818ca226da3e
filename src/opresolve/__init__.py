"""
opresolve - Parameter and input resolution for model graph execution.

Maps declarative node parameters to runtime tensors and values, with
per-frame scoping for control-flow constructs such as while loops.
"""

__version__ = "0.1.0"

# Graph types
from .ir import Node, ParamDescriptor, ParamType, NamedTensorsMap, ValueType

# Execution context and configuration
from .config import ResolverConfig
from .context import ExecutionContext, FrameInfo

# Resolution
from .resolver import (
    ParamResolution,
    get_param_value,
    resolve_param,
    get_tensor,
    get_tensors_for_current_context,
    get_node_name_and_index,
    get_node_name_with_context_id,
    get_padding,
    split,
)

__all__ = [
    # Types
    'Node',
    'ParamDescriptor',
    'ParamType',
    'NamedTensorsMap',
    'ValueType',
    'ParamResolution',

    # Context
    'ExecutionContext',
    'FrameInfo',
    'ResolverConfig',

    # Resolution
    'get_param_value',
    'resolve_param',
    'get_tensor',
    'get_tensors_for_current_context',
    'get_node_name_and_index',
    'get_node_name_with_context_id',
    'get_padding',
    'split',

    # Version
    '__version__',
]
