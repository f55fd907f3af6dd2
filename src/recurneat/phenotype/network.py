"""
Network Module

This module implements the phenotype representation: a genome expressed
as an executable, possibly recurrent, neural network.

Classes:
    Network: Executes one time step of the network encoded by a genome
"""

from typing import TYPE_CHECKING

from recurneat.genotype.node_gene import BIAS_KEY, NodeKey, NodeType  # Needed at runtime

if TYPE_CHECKING:
    from recurneat.genotype import ConnectionGene, Genome

class Network:
    """
    Executable view of a genome.

    The network does not copy the genome: the runtime state (current value,
    gate value and previous-tick value of each node) lives on the node genes,
    so consecutive forward passes on the same genome carry memory from one
    time step to the next through the recurrent connections.

    During a forward pass, nodes are evaluated layer by layer, in the order
    computed by the layering of the genome:
        sum        = Σ source_value * weight (* gate value of the gater, if gated)
        value      = activation(sum)
        value_gate = clamp(0.2 * sum + 0.5, 0, 1)
    Feedforward connections read the value computed earlier in the same pass;
    recurrent connections read the value of the previous pass. Idle nodes are
    never evaluated.

    Public Methods:
        forward_pass(inputs): Process inputs through the network and return outputs

    Public Properties:
        number_nodes:              Total number of nodes in the network
        number_nodes_hidden:       Number of hidden nodes in the network
        number_connections:        Total number of connections in the network
        number_connections_active: Number of active connections in the network
    """

    def __init__(self, genome: 'Genome'):
        """
        Parameters:
            genome: the Genome encoding the network
        """
        self._genome     = genome
        self._input_keys = genome.input_keys

        # For each node, build list of incoming active connections
        self._incoming_connections: dict[NodeKey, list['ConnectionGene']] = {}
        for innov in sorted(genome.conn_genes):
            conn = genome.conn_genes[innov]
            if conn.active:
                self._incoming_connections.setdefault(conn.node_out, []).append(conn)

    @property
    def number_nodes(self) -> int:
        """Total number of nodes in the network."""
        return len(self._genome.node_genes)

    @property
    def number_nodes_hidden(self) -> int:
        """Number of hidden nodes in the network."""
        return len(self._genome.hidden_nodes)

    @property
    def number_connections(self) -> int:
        """Total number of connections in the network."""
        return len(self._genome.conn_genes)

    @property
    def number_connections_active(self) -> int:
        """Number of active connections in the network."""
        return sum(1 for conn in self._genome.conn_genes.values() if conn.active)

    def forward_pass(self, inputs: list[float]) -> list[float]:
        """
        Perform one time step of the network.

        Parameters:
            inputs: the network inputs (one per declared input node, bias excluded)

        Returns:
            the network outputs (one per output node, in key order)
        """
        # The number of inputs must match the number of input neurons
        if len(inputs) != len(self._input_keys):
            raise ValueError(f"Expected {len(self._input_keys)} inputs, got {len(inputs)}")

        nodes = self._genome.node_genes

        # Set input values
        nodes[BIAS_KEY].value = 1.0
        for key, value in zip(self._input_keys, inputs):
            nodes[key].value = float(value)

        # Remember (a blend of) the previous values for the recurrent connections
        alpha = self._genome.memory_blend
        for node in nodes.values():
            node.value_old = node.value_old * (1.0 - alpha) + node.value * alpha

        # Propagate values through the network, layer by layer
        for layer in self._genome.layers:
            for key in sorted(layer):
                node = nodes[key]
                if node.type == NodeType.INPUT:    # skip input nodes, already set
                    continue

                total = 0.0
                for conn in self._incoming_connections.get(key, []):
                    source = nodes[conn.node_in]
                    value  = source.value_old if conn.recurrent else source.value
                    weight = conn.weight
                    if conn.gater is not None:
                        weight *= nodes[conn.gater].value_gate
                    total += value * weight

                node.value      = float(node.activation(total))
                node.value_gate = min(1.0, max(0.0, 0.2 * total + 0.5))

        # Get output values
        return [nodes[key].value for key in self._genome.output_keys]

    def __str__(self):
        nodes_str = "\n".join(f"  {self._genome.node_genes[key]}" for key in sorted(self._genome.node_genes))
        conns_str = "\n".join(f"  {conn}" for conns in self._incoming_connections.values() for conn in conns)
        return f"{nodes_str},\n\n{conns_str}"
