"""
Node Gene Module.

This module implements the NodeKey, NodeType and NodeGene classes.

Classes:
    NodeKey:  Stable structural identity of a node
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node and its runtime state

Constants:
    BIAS_KEY: Key of the bias node
"""

from enum   import Enum
from typing import Callable, NamedTuple

from recurneat.activations import activations, activation_codes

class NodeKey(NamedTuple):
    """
    Identity of a node, independent of where the node is stored.

    'origin' is either a reserved slot number (0 is the bias node, then the
    input slots, then the output slots) or, for hidden nodes, the innovation
    number of the connection that was split to create the node. 'duplicate'
    tells apart nodes created by splitting the same connection more than once.
    """
    origin   : int
    duplicate: int = 0

    def __str__(self):
        return f"{self.origin:>3}:{self.duplicate}"

# The bias node, an input that is always fed the value 1.0
BIAS_KEY = NodeKey(0)

class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

class NodeGene:
    """
    A gene describing a node in a Neural Network.

    Besides the genetic information (type and activation function), a node
    gene carries the runtime state used when the genome is executed:
    - value:      the node output computed during the last forward pass
    - value_gate: the gating signal this node applies to the connections it gates
    - value_old:  the (smoothed) value from the previous pass, read by recurrent connections

    It also memoizes the keys of the nodes it may be connected to by the next
    connection-add mutation (see 'recurneat.genotype.layering.update_free_nodes').

    Public Attributes:
        key:             Unique identifier for this node
        type:            Type of node (INPUT, HIDDEN, or OUTPUT)
        activation_name: Name of the activation function (e.g., 'tanh', 'relu')
        value:           Current output value
        value_gate:      Current gate value
        value_old:       Previous-tick value
        free_forward:    Keys of nodes legally reachable by a new feedforward connection
        free_recurrent:  Keys of nodes legally reachable by a new recurrent connection

    Public Properties:
        activation: The activation function itself (callable)
    """

    def __init__(self,
                 key            : NodeKey,
                 node_type      : NodeType,
                 activation_name: str = "identity"):
        """
        Initialize a node gene.

        Parameters:
            key:             Unique identifier for this node
            node_type:       Type of node (INPUT, HIDDEN, or OUTPUT)
            activation_name: Name of activation function; ignored for input
                             nodes, which always pass their value through
        """
        if node_type == NodeType.INPUT:
            activation_name = "identity"
        if activation_name not in activations:
            raise ValueError(f"Unknown activation function '{activation_name}'")

        self.key            : NodeKey  = key
        self.type           : NodeType = node_type
        self.activation_name: str      = activation_name

        self.value     : float = 0.0
        self.value_gate: float = 0.0
        self.value_old : float = 0.0

        self.free_forward  : set[NodeKey] = set()
        self.free_recurrent: set[NodeKey] = set()

    @property
    def activation(self) -> Callable[[float], float]:
        return activations[self.activation_name]

    def reset(self) -> None:
        """
        Clear the runtime state of the node.
        """
        self.value      = 0.0
        self.value_gate = 0.0
        self.value_old  = 0.0

    def __repr__(self):
        return (f"NodeGene(key={self.key!r}, node_type=NodeType.{self.type.name}, "
                f"activation_name={self.activation_name!r})")

    def __str__(self):
        if self.type == NodeType.INPUT:
            return f"[{self.type.value}{self.key}]"
        else:
            act_code = activation_codes.get(self.activation_name, "???")
            return f"[{self.type.value}{self.key},{act_code},v={self.value:+.3f},g={self.value_gate:.3f}]"
