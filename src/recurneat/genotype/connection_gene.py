"""
Connection Gene Module

This module implements the ConnectionGene class.

Classes:
    ConnectionGene: Gene encoding a weighted, optionally gated, connection between nodes

Constants:
    PENDING_FIRST:  Placeholder innovation number of the first connection created by a mutation
    PENDING_SECOND: Placeholder innovation number of the second connection created by a node split
"""

from recurneat.genotype.node_gene import NodeKey
from recurneat.run.config         import Config

# Connections created by a mutation live under these (never valid) innovation
# numbers until the innovation ledger assigns their canonical ones.
PENDING_FIRST  = -1
PENDING_SECOND = -2

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the network graph, connecting
    a source node to a destination node with an associated weight. Within a genome,
    connection genes are keyed by their innovation number, which is identical across
    the population for structurally identical connections and is used to align genes
    during distance calculation and crossover.

    Connections can be deactivated rather than deleted, which preserves their
    historical marking. A connection is 'recurrent' when its source is not in an
    earlier layer than its destination; this flag is derived by the layering pass
    and must not be set by hand. A connection may be gated by a third node, whose
    gate value then multiplies the connection weight.

    Public Attributes:
        node_in:    Key of the source node
        node_out:   Key of the destination node
        weight:     Weight of the connection (always within the configured range)
        active:     Whether this connection is active in the network
        recurrent:  Whether this connection reads the previous-tick value of its source
        gater:      Key of the gating node, or None
        innovation: Innovation number (or a PENDING placeholder)

    Public Methods:
        assign_weight(weight): Set the weight, clamped to the allowed range
    """

    def __init__(self,
                 node_in   : NodeKey,
                 node_out  : NodeKey,
                 weight    : float,
                 innovation: int,
                 config    : Config,
                 active    : bool = True,
                 recurrent : bool = False,
                 gater     : NodeKey | None = None):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    Key of the source node
            node_out:   Key of the destination node
            weight:     Weight of the connection (clamped to the allowed range)
            innovation: Number identifying this connection across the population
            config:     Stores configuration parameters
            active:     Whether this connection is active in the network
            recurrent:  Whether this connection is recurrent
            gater:      Key of the node gating this connection
        """
        self._config   : Config         = config
        self.node_in   : NodeKey        = node_in
        self.node_out  : NodeKey        = node_out
        self.active    : bool           = active
        self.recurrent : bool           = recurrent
        self.gater     : NodeKey | None = gater
        self.innovation: int            = innovation
        self.assign_weight(weight)

    @property
    def is_pending(self) -> bool:
        return self.innovation in (PENDING_FIRST, PENDING_SECOND)

    def assign_weight(self, weight: float) -> None:
        """
        Set the connection weight, clamped to [min_weight, max_weight].
        """
        self.weight: float = float(min(self._config.max_weight, max(self._config.min_weight, weight)))

    def __repr__(self):
        return (f"ConnectionGene(node_in={self.node_in!r}, node_out={self.node_out!r}, "
                f"weight={self.weight:+.6f}, active={self.active}, recurrent={self.recurrent}, "
                f"gater={self.gater!r}, innovation={self.innovation})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.active else 'D'},"
        s += f"{self.node_in}=>{self.node_out},{self.weight:+.02f}"
        if self.gater is not None:
            s += f",G{self.gater}"
        if self.recurrent:
            s += ",R"
        return s + "]"
