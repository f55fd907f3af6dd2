"""
Genome Module

This module implements the Genome class.

Classes:
    Genome:        Complete genome representing a (possibly recurrent) neural network
    CapacityError: Raised when a genome runs out of reserved input/output slots
"""

import copy

from loguru import logger

from recurneat.run.config               import Config
from recurneat.genotype.connection_gene import ConnectionGene, PENDING_FIRST, PENDING_SECOND
from recurneat.genotype.layering        import sort_layers, update_free_nodes
from recurneat.genotype.mutation        import mutate, Pending
from recurneat.genotype.node_gene       import BIAS_KEY, NodeGene, NodeKey, NodeType

class CapacityError(RuntimeError):
    """
    A genome has used all the input or output slots reserved for it.
    """

class Genome:
    """
    A genome representing a neural network as a collection of node and connection genes.

    The genome encodes the structure and parameters of a neural network at the
    genotype level. It consists of:
    - Node genes: describe network nodes (input, hidden, output) and hold their runtime values
    - Connection genes: describe weighted connections between nodes, each with an
      innovation number shared across the population for identical structure

    Unlike a feedforward genome, cycles are allowed. The network is evaluated layer by
    layer (see 'recurneat.genotype.layering'); connections going backwards or sideways
    are recurrent and read the value their source had on the previous evaluation.

    A minimal genome contains the bias node, the input nodes and the output nodes, and
    no connections. Input and output nodes have reserved keys:
        - Bias node:    (0, 0), always fed the value 1.0
        - Input nodes:  (1, 0) ... (max_inputs, 0)
        - Output nodes: (max_inputs + 1, 0) ... (max_inputs + max_outputs, 0)
        - Hidden nodes: (innovation number of the split connection, duplicate index)

    Besides its genes, a genome carries its own mutation operator weights and the
    bookkeeping used by the population (fitness, species id, alive flag).

    Public Attributes:
        node_genes:         Dictionary mapping node keys to NodeGene objects
        conn_genes:         Dictionary mapping innovation numbers to ConnectionGene objects
        layers:             Evaluation order, a list of sets of node keys
        idle:               Keys of nodes not reachable by the layering (never evaluated)
        generation:         Number of mutations this lineage went through
        num_inputs:         Number of declared inputs (bias excluded)
        num_outputs:        Number of outputs
        max_inputs:         Number of reserved input slots
        max_outputs:        Number of reserved output slots
        mutation_weights:   Relative odds of each 'MutationType'
        recurrence:         Whether recurrent connections may be added
        memory_blend:       Smoothing coefficient of the previous-tick values
        activation_io:      Activation function of outputs and new hidden nodes
        activation_options: Activation functions available for mutation
        fitness:            Fitness, set by the caller
        species:            ID of the species this genome belongs to
        alive:              Whether this genome is alive, set by the caller

    Public Properties:
        input_keys:   Keys of the declared input nodes (bias excluded), sorted
        output_keys:  Keys of the output nodes, sorted
        hidden_nodes: List of all hidden node genes
        has_pending:  Whether some connection awaits its innovation number

    Public Methods:
        add_input() / add_output():        Activate the next reserved input/output slot
        mutate():                          Apply one random mutation
        resolve_pending(first, second):    Replace placeholder innovation numbers
        process(inputs):                   Evaluate the network once
        get_outputs():                     Outputs of the last evaluation
        distance(other):                   Calculate genetic distance to another genome
        crossover(other):                  Create offspring by crossing this genome with another
        prune():                           Create a cleaned-up copy of this genome
        validate():                        Check that every connection refers to existing nodes
        to_dict():                         Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict, config): Recreate a genome from its dictionary representation

    Static Methods:
        show_aligned(genome1, genome2): Print two genomes with aligned genes for comparison
    """

    def __init__(self, config: Config):
        """
        Initialize a minimal Genome.

        A minimal genome has the bias node, 'num_inputs' input nodes and
        'num_outputs' output nodes, all numbers retrieved from the Config object,
        and no connections.

        Parameters:
            config: Stores configuration parameters
        """
        self._config = config

        self.node_genes: dict[NodeKey, NodeGene]   = {}  # node key => node gene
        self.conn_genes: dict[int, ConnectionGene] = {}  # innovation number => connection gene
        self.layers    : list[set[NodeKey]]        = []
        self.idle      : set[NodeKey]              = set()

        self.generation : int = 0
        self.num_inputs : int = 0
        self.num_outputs: int = 0
        self.max_inputs : int = config.max_inputs
        self.max_outputs: int = config.max_outputs

        self.mutation_weights  : list[int] = list(config.mutation_chances)
        self.recurrence        : bool      = config.recurrence
        self.memory_blend      : float     = config.memory_blend
        self.activation_io     : str       = config.activation_io
        self.activation_options: list[str] = list(config.activation_options)

        self.fitness: float = 0.0
        self.species: int   = 0
        self.alive  : bool  = True

        self._outputs: list[float] = []

        if config.num_inputs > config.max_inputs or config.num_outputs > config.max_outputs:
            raise ValueError("num_inputs/num_outputs cannot exceed max_inputs/max_outputs")

        self.node_genes[BIAS_KEY] = NodeGene(BIAS_KEY, NodeType.INPUT)
        for _ in range(config.num_inputs):
            self._add_input_node()
        for _ in range(config.num_outputs):
            self._add_output_node()

        self.refresh()

    @property
    def input_keys(self) -> list[NodeKey]:
        return [NodeKey(i) for i in range(1, self.num_inputs + 1)]

    @property
    def output_keys(self) -> list[NodeKey]:
        return [NodeKey(self.max_inputs + j) for j in range(1, self.num_outputs + 1)]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes.values() if node.type == NodeType.HIDDEN]

    @property
    def has_pending(self) -> bool:
        return PENDING_FIRST in self.conn_genes or PENDING_SECOND in self.conn_genes

    def add_input(self) -> NodeKey:
        """
        Activate the next reserved input slot.

        Returns:
            the key of the new input node

        Raises:
            CapacityError: if all 'max_inputs' slots are in use (the genome is left unchanged)
        """
        if self.num_inputs >= self.max_inputs:
            logger.warning(f"Cannot add an input node: all {self.max_inputs} input slots are in use")
            raise CapacityError(f"All {self.max_inputs} input slots are in use")
        key = self._add_input_node()
        self.refresh()
        return key

    def add_output(self) -> NodeKey:
        """
        Activate the next reserved output slot.

        Returns:
            the key of the new output node

        Raises:
            CapacityError: if all 'max_outputs' slots are in use (the genome is left unchanged)
        """
        if self.num_outputs >= self.max_outputs:
            logger.warning(f"Cannot add an output node: all {self.max_outputs} output slots are in use")
            raise CapacityError(f"All {self.max_outputs} output slots are in use")
        key = self._add_output_node()
        self.refresh()
        return key

    def _add_input_node(self) -> NodeKey:
        self.num_inputs += 1
        key = NodeKey(self.num_inputs)
        self.node_genes[key] = NodeGene(key, NodeType.INPUT)
        return key

    def _add_output_node(self) -> NodeKey:
        self.num_outputs += 1
        key = NodeKey(self.max_inputs + self.num_outputs)
        self.node_genes[key] = NodeGene(key, NodeType.OUTPUT, self.activation_io)
        return key

    def next_hidden_key(self, origin: int) -> NodeKey:
        """
        Key for a new hidden node created by splitting connection 'origin'.
        The same connection can be split several times; each split gets the
        lowest duplicate index not already used in this genome.
        """
        duplicate = 0
        while NodeKey(origin, duplicate) in self.node_genes:
            duplicate += 1
        return NodeKey(origin, duplicate)

    def get_mutation_weights(self) -> list[int]:
        return list(self.mutation_weights)

    def set_mutation_weights(self, weights: list[int]) -> None:
        """
        Overwrite the leading operator weights (a shorter list leaves the rest untouched).
        """
        if len(weights) > len(self.mutation_weights):
            raise ValueError(f"Expected at most {len(self.mutation_weights)} weights, got {len(weights)}")
        if any(w < 0 for w in weights):
            raise ValueError("Mutation weights must be non-negative")
        self.mutation_weights[:len(weights)] = list(weights)

    def refresh(self) -> None:
        """
        Recompute the layers, the recurrent flags and the candidate sets.
        Must be called after any structural change.
        """
        sort_layers(self)
        update_free_nodes(self)

    def mutate(self, allow_pruning: bool = True) -> Pending:
        """
        Apply one random mutation (see 'recurneat.genotype.mutation.mutate').

        Returns:
            the signatures of the connections awaiting their innovation numbers
        """
        return mutate(self, allow_pruning)

    def resolve_pending(self, first_innovation: int, second_innovation: int | None = None) -> int:
        """
        Move the connections stored under placeholder numbers to their canonical innovation numbers.

        If the genome already holds a connection under a canonical number (e.g. it
        inherited the same structure and the connection was later deactivated), that
        connection is replaced by the new one.

        Parameters:
            first_innovation:  number for the connection stored under PENDING_FIRST
            second_innovation: number for the connection stored under PENDING_SECOND

        Returns:
            the number of connections that were moved
        """
        rewrites = 0
        for placeholder, innovation in ((PENDING_FIRST,  first_innovation),
                                        (PENDING_SECOND, second_innovation)):
            if innovation is None or placeholder not in self.conn_genes:
                continue
            conn = self.conn_genes.pop(placeholder)
            conn.innovation = innovation
            self.conn_genes[innovation] = conn
            rewrites += 1

        # Connections are scanned by innovation number during layering
        if rewrites:
            self.refresh()
        return rewrites

    def process(self, inputs: list[float]) -> list[float]:
        """
        Evaluate the network once.

        Parameters:
            inputs: one value per declared input

        Returns:
            one value per output node, in key order
        """
        # Import here to avoid circular import
        from recurneat.phenotype.network import Network

        self._outputs = Network(self).forward_pass(inputs)
        return list(self._outputs)

    def get_outputs(self) -> list[float]:
        return list(self._outputs)

    def reset(self) -> None:
        """
        Clear the runtime state of all nodes.
        """
        for node in self.node_genes.values():
            node.reset()
        self._outputs = []

    def distance(self, other: 'Genome') -> float:
        """
        Calculate genetic distance between this genome and another.
           distance = (c1 * E / N) + (c2 * D / N) + c3 * W̄ + c4 * F

        Where:
        - E = number of excess connection genes
        - D = number of disjoint connection genes
        - N = number of connection genes in larger genome
        - W̄ = average weight difference of matching connection genes
        - F = fraction of the nodes present in both genomes whose activation functions differ
        - c1, c2, c3, c4 = weight of various terms (from configuration file)

        Parameters:
            other: the genome relative to which we are calculating the distance

        Returns:
            the genetic distance between this genome and 'other'

        Raises:
            RuntimeError: if either genome has no connection genes
        """
        if not self.conn_genes or not other.conn_genes:
            raise RuntimeError("Cannot calculate the distance of a genome without connections")

        # Get innovation numbers from both genomes
        innovs1 = set(self.conn_genes.keys())
        innovs2 = set(other.conn_genes.keys())

        # Find matching, disjoint, and excess genes
        matching_innovs     =  innovs1 & innovs2
        non_matching_innovs = (innovs1 | innovs2) - matching_innovs

        # Excess   genes: beyond the smaller genome's max innovation number
        # Disjoint genes: within the overlapping range but not matching
        max_shared   = min(max(innovs1), max(innovs2))
        num_excess   = sum(1 for innov in non_matching_innovs if innov >  max_shared)
        num_disjoint = sum(1 for innov in non_matching_innovs if innov <= max_shared)

        # Average connection weight difference for matching connection genes
        avg_weight_diff = 0.0
        if matching_innovs:
            weight_diff = sum(abs(self.conn_genes[i].weight - other.conn_genes[i].weight) for i in matching_innovs)
            avg_weight_diff = weight_diff / len(matching_innovs)

        # Fraction of matching nodes using different activation functions
        matching_keys = self.node_genes.keys() & other.node_genes.keys()
        activation_diff = 0.0
        if matching_keys:
            num_different = sum(1 for key in matching_keys
                                if self.node_genes[key].activation_name != other.node_genes[key].activation_name)
            activation_diff = num_different / len(matching_keys)

        N = max(len(self.conn_genes), len(other.conn_genes))
        return (self._config.distance_excess_coeff     * num_excess   / N +
                self._config.distance_disjoint_coeff   * num_disjoint / N +
                self._config.distance_weight_coeff     * avg_weight_diff  +
                self._config.distance_activation_coeff * activation_diff)

    def crossover(self, other: 'Genome') -> 'Genome':
        """
        Create offspring by crossing this genome with another.

        The offspring is a copy of the fitter parent ('self' on ties): its
        structure, gaters and activation functions come from that parent only.
        The weight of every connection present in both parents is the average
        of the two parental weights.

        Parameters:
            other: the other parent genome

        Returns:
            New offspring genome

        Raises:
            RuntimeError: if either parent has no connection genes or is not reconciled
        """
        if not self.conn_genes or not other.conn_genes:
            raise RuntimeError("Cannot cross over a genome without connections")
        if self.has_pending or other.has_pending:
            raise RuntimeError("Cannot cross over a genome whose last mutation was not reconciled")

        fitter, weaker = (self, other) if self.fitness >= other.fitness else (other, self)

        offspring = fitter._clone()
        for innov in fitter.conn_genes.keys() & weaker.conn_genes.keys():
            offspring.conn_genes[innov].assign_weight((fitter.conn_genes[innov].weight +
                                                       weaker.conn_genes[innov].weight) / 2)

        offspring.fitness = 0.0
        offspring.alive   = True
        return offspring

    def _clone(self) -> 'Genome':
        """
        Deep copy of this genome; the copy and its genes share this genome's Config.
        """
        return copy.deepcopy(self, {id(self._config): self._config})

    def prune(self) -> 'Genome':
        """
        Create a cleaned-up copy of this genome.

        This method creates a deep copy of the current genome and then:
        1. Removes all inactive connections and those with a negligible weight
        2. Merges connections with the same endpoints, gater and recurrent flag
           into the one with the lowest innovation number, summing their weights
        3. Removes all hidden nodes that cannot reach any output node

        Returns:
            A new Genome object, re-layered
        """
        pruned_genome = self._clone()

        # Remove all inactive or near-zero connections
        negligible = [innov for innov, conn in pruned_genome.conn_genes.items()
                      if not conn.active or abs(conn.weight) <= 1e-4]
        for innov in negligible:
            pruned_genome.delete_connection(innov)

        # Merge duplicates
        survivors: dict[tuple, ConnectionGene] = {}
        for innov in sorted(pruned_genome.conn_genes):
            conn = pruned_genome.conn_genes[innov]
            key  = (conn.node_in, conn.node_out, conn.gater, conn.recurrent)
            if key in survivors:
                survivors[key].assign_weight(survivors[key].weight + conn.weight)
                pruned_genome.delete_connection(innov)
            else:
                survivors[key] = conn

        # Remove all dead-end hidden nodes
        for node_key in pruned_genome._get_dead_end_nodes():
            pruned_genome.delete_node(node_key)

        pruned_genome.refresh()
        return pruned_genome

    def delete_node(self, node_key: NodeKey) -> None:
        """
        Delete a hidden node, all connections starting or ending at it,
        and every reference to it as a gater.

        Parameters:
            node_key: key of the node to delete

        Raises:
            ValueError: If the node is not a hidden node
            KeyError:   If the node does not exist in the genome
        """
        if node_key not in self.node_genes:
            raise KeyError(f"Node {node_key} does not exist in the genome")
        node = self.node_genes[node_key]

        if node.type != NodeType.HIDDEN:
            raise ValueError(f"Cannot delete node {node_key}: only hidden nodes can be deleted (node type is {node.type.name})")

        connections_to_remove = [innov for innov, conn in self.conn_genes.items()
                                 if conn.node_in == node_key or conn.node_out == node_key]
        for innov in connections_to_remove:
            self.delete_connection(innov)

        for conn in self.conn_genes.values():
            if conn.gater == node_key:
                conn.gater = None

        del self.node_genes[node_key]

    def delete_connection(self, innovation_number: int) -> None:
        """
        Delete a connection from the genome.

        Parameters:
            innovation_number: Innovation number of the connection to delete

        Raises:
            KeyError: If the innovation number does not exist in the genome
        """
        if innovation_number not in self.conn_genes:
            raise KeyError(f"Connection with innovation number {innovation_number} does not exist in the genome")

        del self.conn_genes[innovation_number]

    def reachable_from_inputs(self, excluded: int | None = None) -> set[NodeKey]:
        """
        Find all nodes reachable from the input nodes (bias included) via active connections.

        Parameters:
            excluded: innovation number of a connection to ignore

        Returns:
            the keys of the reachable nodes, input nodes included
        """
        adjacency: dict[NodeKey, list[NodeKey]] = {}
        for innov, conn in self.conn_genes.items():
            if conn.active and innov != excluded:
                adjacency.setdefault(conn.node_in, []).append(conn.node_out)

        reachable = set()
        stack = [key for key, node in self.node_genes.items() if node.type == NodeType.INPUT]
        while stack:
            current = stack.pop()
            if current in reachable:
                continue
            reachable.add(current)
            stack.extend(n for n in adjacency.get(current, []) if n not in reachable)

        return reachable

    def _get_dead_end_nodes(self) -> list[NodeKey]:
        """
        Find all hidden nodes from which no output node can be reached via active connections.
        Performs a single backward search starting from all output nodes.
        """
        reverse_adjacency: dict[NodeKey, list[NodeKey]] = {}
        for conn in self.conn_genes.values():
            if conn.active:
                reverse_adjacency.setdefault(conn.node_out, []).append(conn.node_in)

        reachable = set()
        stack = list(self.output_keys)
        while stack:
            current = stack.pop()
            if current in reachable:
                continue
            reachable.add(current)
            stack.extend(n for n in reverse_adjacency.get(current, []) if n not in reachable)

        return [node.key for node in self.hidden_nodes if node.key not in reachable]

    def validate(self) -> None:
        """
        Check that every connection refers to nodes present in the genome.

        Raises:
            RuntimeError: if a connection endpoint or gater is missing
        """
        for innov, conn in self.conn_genes.items():
            for role, key in (("source", conn.node_in), ("destination", conn.node_out), ("gater", conn.gater)):
                if key is not None and key not in self.node_genes:
                    raise RuntimeError(f"Connection {innov} refers to missing {role} node {key}")

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        Everything is included (derived layers and candidate sets, runtime values
        and metadata), so that 'from_dict' recreates an identical genome.
        Node keys are written as [origin, duplicate] pairs.

        Returns:
            A dictionary made only of lists, numbers, strings, booleans and None
        """
        def key_list(keys):
            return [list(key) for key in sorted(keys)]

        nodes = []
        for key in sorted(self.node_genes):
            node = self.node_genes[key]
            nodes.append({
                "key"           : list(key),
                "type"          : node.type.name.lower(),
                "activation"    : node.activation_name,
                "value"         : node.value,
                "value_gate"    : node.value_gate,
                "value_old"     : node.value_old,
                "free_forward"  : key_list(node.free_forward),
                "free_recurrent": key_list(node.free_recurrent),
            })

        connections = []
        for innov in sorted(self.conn_genes):
            conn = self.conn_genes[innov]
            connections.append({
                "innovation": conn.innovation,
                "from"      : list(conn.node_in),
                "to"        : list(conn.node_out),
                "weight"    : conn.weight,
                "active"    : conn.active,
                "recurrent" : conn.recurrent,
                "gater"     : list(conn.gater) if conn.gater is not None else None,
            })

        return {
            "num_inputs"        : self.num_inputs,
            "num_outputs"       : self.num_outputs,
            "max_inputs"        : self.max_inputs,
            "max_outputs"       : self.max_outputs,
            "generation"        : self.generation,
            "mutation_weights"  : list(self.mutation_weights),
            "recurrence"        : self.recurrence,
            "memory_blend"      : self.memory_blend,
            "activation_io"     : self.activation_io,
            "activation_options": list(self.activation_options),
            "fitness"           : self.fitness,
            "species"           : self.species,
            "alive"             : self.alive,
            "nodes"             : nodes,
            "connections"       : connections,
            "layers"            : [key_list(layer) for layer in self.layers],
            "idle"              : key_list(self.idle),
            "outputs"           : list(self._outputs),
        }

    @classmethod
    def from_dict(cls, genome_dict: dict, config: Config) -> 'Genome':
        """
        Recreate a genome from the dictionary produced by 'to_dict'.

        The stored layers and candidate sets are used as they are; they are not
        recomputed, so the result is identical to the genome that was saved.

        Parameters:
            genome_dict: Dictionary describing the genome
            config:      Stores configuration parameters

        Returns:
            the recreated genome

        Raises:
            ValueError:   if a node type is unknown or a connection is stored under a placeholder number
            RuntimeError: if a connection refers to a missing node
        """
        def to_key(pair):
            return NodeKey(*pair)

        genome = cls.__new__(cls)
        genome._config = config

        genome.generation         = genome_dict["generation"]
        genome.num_inputs         = genome_dict["num_inputs"]
        genome.num_outputs        = genome_dict["num_outputs"]
        genome.max_inputs         = genome_dict["max_inputs"]
        genome.max_outputs        = genome_dict["max_outputs"]
        genome.mutation_weights   = list(genome_dict["mutation_weights"])
        genome.recurrence         = genome_dict["recurrence"]
        genome.memory_blend       = genome_dict["memory_blend"]
        genome.activation_io      = genome_dict["activation_io"]
        genome.activation_options = list(genome_dict["activation_options"])
        genome.fitness            = genome_dict["fitness"]
        genome.species            = genome_dict["species"]
        genome.alive              = genome_dict["alive"]
        genome._outputs           = list(genome_dict.get("outputs", []))

        node_types = {node_type.name.lower(): node_type for node_type in NodeType}

        genome.node_genes = {}
        for node_dict in genome_dict["nodes"]:
            if node_dict["type"] not in node_types:
                raise ValueError(f"Unknown node type '{node_dict['type']}'")
            key  = to_key(node_dict["key"])
            node = NodeGene(key, node_types[node_dict["type"]], node_dict["activation"])
            node.value          = node_dict["value"]
            node.value_gate     = node_dict["value_gate"]
            node.value_old      = node_dict["value_old"]
            node.free_forward   = {to_key(k) for k in node_dict["free_forward"]}
            node.free_recurrent = {to_key(k) for k in node_dict["free_recurrent"]}
            genome.node_genes[key] = node

        genome.conn_genes = {}
        for conn_dict in genome_dict["connections"]:
            innov = conn_dict["innovation"]
            if innov in (PENDING_FIRST, PENDING_SECOND):
                raise ValueError("Cannot load a genome holding unreconciled connections")
            gater = to_key(conn_dict["gater"]) if conn_dict["gater"] is not None else None
            genome.conn_genes[innov] = ConnectionGene(to_key(conn_dict["from"]),
                                                      to_key(conn_dict["to"]),
                                                      conn_dict["weight"],
                                                      innov,
                                                      config,
                                                      active=conn_dict["active"],
                                                      recurrent=conn_dict["recurrent"],
                                                      gater=gater)

        genome.layers = [{to_key(k) for k in layer} for layer in genome_dict["layers"]]
        genome.idle   = {to_key(k) for k in genome_dict["idle"]}

        genome.validate()
        return genome

    def __str__(self):
        node_genes_str = ''.join(str(self.node_genes[key]) for key in sorted(self.node_genes))
        conn_genes_str = ''.join(str(self.conn_genes[innov]) for innov in sorted(self.conn_genes))
        layers_str     = ' | '.join(' '.join(str(key) for key in sorted(layer)) for layer in self.layers)
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}\nLayers: {layers_str}"

    @staticmethod
    def show_aligned(genome1: 'Genome', genome2: 'Genome') -> None:
        """
        Print two genomes aligning the node and connection genes.
        """

        # Align nodes by key
        node_keys_all = sorted(set(genome1.node_genes.keys()) | set(genome2.node_genes.keys()))
        node_str1 = ""
        node_str2 = ""
        for node_key in node_keys_all:
            str1 = str(genome1.node_genes[node_key]) if node_key in genome1.node_genes else ""
            str2 = str(genome2.node_genes[node_key]) if node_key in genome2.node_genes else ""
            width = max(len(str1), len(str2))
            node_str1 += str1.ljust(width)
            node_str2 += str2.ljust(width)

        # Print aligned nodes
        print(f"Nodes:\n{node_str1}\n{node_str2}\n")

        # Align connections by innovation number
        innovs_all = sorted(set(genome1.conn_genes.keys()) | set(genome2.conn_genes.keys()))
        conn_str1 = ""
        conn_str2 = ""
        for innov in innovs_all:
            str1 = str(genome1.conn_genes[innov]) if innov in genome1.conn_genes else ""
            str2 = str(genome2.conn_genes[innov]) if innov in genome2.conn_genes else ""
            width = max(len(str1), len(str2))
            conn_str1 += str1.ljust(width)
            conn_str2 += str2.ljust(width)

        # Print aligned connections
        print(f"Connections:\n{conn_str1}\n{conn_str2}\n")
