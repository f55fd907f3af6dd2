"""
Mutation Module

This module implements the mutation operators applied to genomes.

A mutation applies exactly one operator, selected at random according
to the genome's own operator weights. Operators that create connections
do not obtain innovation numbers themselves: the new connections are stored
under placeholder numbers and their signatures are returned, to be resolved
by the population's innovation ledger once the whole wave is done.

Classes:
    MutationType: Enumeration of the weighted mutation operators

Functions:
    mutate(genome): Apply one randomly selected operator to a genome
"""

import random
from enum   import Enum
from typing import TYPE_CHECKING, Callable

from recurneat.genotype.connection_gene   import ConnectionGene, PENDING_FIRST, PENDING_SECOND
from recurneat.genotype.innovation_ledger import PendingConnection, PendingSplit
from recurneat.genotype.node_gene         import NodeGene, NodeType
if TYPE_CHECKING:
    from recurneat.genotype.genome import Genome

Pending = tuple[PendingConnection | None, PendingSplit | None]

NO_PENDING: Pending = (None, None)

class MutationType(Enum):
    """
    The weighted mutation operators.
    The order matches the order of 'Genome.mutation_weights'.
    """
    WEIGHT             = 0
    CONNECTION_ADD     = 1
    NODE_ADD           = 2
    GATER_ADD          = 3
    GATER_REMOVE       = 4
    CONNECTION_ENABLE  = 5
    CONNECTION_DISABLE = 6
    ACTIVATION         = 7

def mutate(genome: 'Genome', allow_pruning: bool = True) -> Pending:
    """
    Apply one mutation to a genome.

    The operator is drawn according to 'genome.mutation_weights'. When pruning
    is enabled, with probability 'prune_ratio' one of the two pruning operators
    is applied instead. Layers and candidate sets are recomputed afterwards.

    Parameters:
        genome:        the genome to mutate (modified in place)
        allow_pruning: whether the pruning operators may be selected

    Returns:
        (pending connection, pending split); both None if nothing was created

    Raises:
        RuntimeError: if the genome still holds connections awaiting innovation numbers
    """
    if genome.has_pending:
        raise RuntimeError("Cannot mutate a genome whose previous mutation was not reconciled")

    genome.generation += 1
    config = genome._config

    if allow_pruning and config.prune_enabled and random.random() < config.prune_ratio:
        operator = random.choice(_PRUNING_OPERATORS)
    else:
        operator = _select_operator(genome.mutation_weights)

    pending = operator(genome) if operator is not None else NO_PENDING

    genome.refresh()
    return pending

def _select_operator(weights: list[int]) -> Callable[['Genome'], Pending] | None:
    """
    Weighted draw of a mutation operator; None if all weights are zero.
    """
    if sum(weights) <= 0:
        return None
    mutation_type = random.choices(list(MutationType), weights=weights)[0]
    return _OPERATORS[mutation_type]

def mutate_weight(genome: 'Genome') -> Pending:
    """
    Replace or perturb the weight of a random active connection.

    The perturbation is Gaussian, and its standard deviation shrinks as
    the genome ages, so that old lineages are fine-tuned rather than shaken.
    """
    active_conns = [conn for conn in genome.conn_genes.values() if conn.active]
    if not active_conns:
        return NO_PENDING

    config = genome._config
    conn   = random.choice(active_conns)
    if random.random() < config.weight_replace_prob:
        conn.assign_weight(random.uniform(-config.weight_init_range, config.weight_init_range))
    else:
        stdev = config.weight_perturb_scale / (genome.generation + config.weight_perturb_offset)
        conn.assign_weight(conn.weight + random.gauss(0.0, stdev))
    return NO_PENDING

def add_connection(genome: 'Genome') -> Pending:
    """
    Add a new connection between two existing nodes.

    The connection is recurrent with probability 'recurrent_add_prob' (only
    if the genome allows recurrence), otherwise feedforward. When only one kind
    of connection can still be added, that kind is chosen without a draw.
    Its endpoints are picked among the memoized candidate sets, so it never
    duplicates an active connection of the same kind and never breaks the
    input/output rules.
    """
    config            = genome._config
    forward_sources   = [key for key, node in genome.node_genes.items() if node.free_forward]
    recurrent_sources = [key for key, node in genome.node_genes.items() if node.free_recurrent]
    if not genome.recurrence or config.recurrent_add_prob <= 0.0:
        recurrent_sources = []
    if config.recurrent_add_prob >= 1.0 and genome.recurrence:
        forward_sources = []
    if not forward_sources and not recurrent_sources:
        return NO_PENDING

    # The coin is only tossed when both kinds of connection are possible
    if forward_sources and recurrent_sources:
        recurrent = random.random() < config.recurrent_add_prob
    else:
        recurrent = bool(recurrent_sources)
    sources = recurrent_sources if recurrent else forward_sources

    source      = random.choice(sources)
    candidates  = genome.node_genes[source].free_recurrent if recurrent else genome.node_genes[source].free_forward
    destination = random.choice(sorted(candidates))

    weight = random.uniform(-config.weight_init_range, config.weight_init_range)
    genome.conn_genes[PENDING_FIRST] = ConnectionGene(source, destination, weight, PENDING_FIRST, config,
                                                      recurrent=recurrent)
    return PendingConnection(source, destination, recurrent), None

def add_node(genome: 'Genome') -> Pending:
    """
    Split a random active connection by adding a new node.

    The split connection is deactivated. The connection leading into the new
    node has weight 1.0 and the one leading out of it inherits the old weight,
    so the network initially behaves (almost) as before.
    """
    active_conns = [conn for conn in genome.conn_genes.values() if conn.active]
    if not active_conns:
        return NO_PENDING

    config     = genome._config
    split_conn = random.choice(active_conns)
    split_conn.active = False

    new_key = genome.next_hidden_key(split_conn.innovation)
    genome.node_genes[new_key] = NodeGene(new_key, NodeType.HIDDEN, genome.activation_io)

    first  = PendingConnection(split_conn.node_in, new_key, split_conn.recurrent)
    second = PendingConnection(new_key, split_conn.node_out, split_conn.recurrent)

    genome.conn_genes[PENDING_FIRST]  = ConnectionGene(first.source, first.destination, 1.0,
                                                       PENDING_FIRST, config, recurrent=first.recurrent)
    genome.conn_genes[PENDING_SECOND] = ConnectionGene(second.source, second.destination, split_conn.weight,
                                                       PENDING_SECOND, config, recurrent=second.recurrent)
    return None, PendingSplit(first, second)

def add_gater(genome: 'Genome') -> Pending:
    """
    Let a random node gate a random ungated connection.
    The gating node may be any node other than the connection's endpoints.
    """
    # A gater exists unless the genome has no node besides the two endpoints
    ungated = [conn for conn in genome.conn_genes.values()
               if conn.gater is None and len(genome.node_genes) > len({conn.node_in, conn.node_out})]
    if not ungated:
        return NO_PENDING

    conn     = random.choice(ungated)
    eligible = [key for key in genome.node_genes if key != conn.node_in and key != conn.node_out]
    conn.gater = random.choice(eligible)
    return NO_PENDING

def remove_gater(genome: 'Genome') -> Pending:
    """
    Remove the gater of a random gated connection.
    """
    gated = [conn for conn in genome.conn_genes.values() if conn.gater is not None]
    if gated:
        random.choice(gated).gater = None
    return NO_PENDING

def enable_connection(genome: 'Genome') -> Pending:
    """
    Randomly enable a currently inactive connection.
    """
    inactive_conns = [conn for conn in genome.conn_genes.values() if not conn.active]
    if inactive_conns:
        random.choice(inactive_conns).active = True
    return NO_PENDING

def disable_connection(genome: 'Genome') -> Pending:
    """
    Randomly disable a currently active connection.
    """
    active_conns = [conn for conn in genome.conn_genes.values() if conn.active]
    if active_conns:
        random.choice(active_conns).active = False
    return NO_PENDING

def mutate_activation(genome: 'Genome') -> Pending:
    """
    Give a random hidden node a random activation function.
    """
    hidden_nodes = genome.hidden_nodes
    if hidden_nodes and genome.activation_options:
        random.choice(hidden_nodes).activation_name = random.choice(genome.activation_options)
    return NO_PENDING

def prune_node(genome: 'Genome') -> Pending:
    """
    Remove a random pass-through hidden node, splicing its two connections into one.

    A pass-through node has exactly one active incoming connection a->h and
    exactly one active outgoing connection h->b (self-loops not counted).
    The node, every connection touching it and every gater reference to it
    are removed, and a->b takes over the average 'm' of the two weights:
     + if a->b already exists, it is activated and 'm' is added to its weight
     + otherwise a new connection with weight m/2 is created
    """
    candidates = []
    for node in genome.hidden_nodes:
        key      = node.key
        inbound  = [c for c in genome.conn_genes.values() if c.active and c.node_out == key and c.node_in  != key]
        outbound = [c for c in genome.conn_genes.values() if c.active and c.node_in  == key and c.node_out != key]
        if len(inbound) != 1 or len(outbound) != 1:
            continue
        # Splicing must not produce an input->input connection
        if (genome.node_genes[inbound[0].node_in].type   == NodeType.INPUT and
            genome.node_genes[outbound[0].node_out].type == NodeType.INPUT):
            continue
        candidates.append((key, inbound[0], outbound[0]))

    if not candidates:
        return NO_PENDING

    key, conn_in, conn_out = random.choice(candidates)
    source, destination    = conn_in.node_in, conn_out.node_out
    merged_weight          = (conn_in.weight + conn_out.weight) / 2
    recurrent              = conn_in.recurrent or conn_out.recurrent

    genome.delete_node(key)

    existing = [c for c in genome.conn_genes.values() if c.node_in == source and c.node_out == destination]
    if existing:
        active_existing = [c for c in existing if c.active]
        conn = active_existing[0] if active_existing else existing[0]
        conn.active = True
        conn.assign_weight(conn.weight + merged_weight)
        return NO_PENDING

    config = genome._config
    genome.conn_genes[PENDING_FIRST] = ConnectionGene(source, destination, merged_weight / 2, PENDING_FIRST, config,
                                                      recurrent=recurrent)
    return PendingConnection(source, destination, recurrent), None

def prune_connection(genome: 'Genome') -> Pending:
    """
    Delete a random redundant connection.

    A connection is redundant if it is a self-loop, or if both of its
    endpoints remain reachable from the input nodes without it.
    The last connection of a genome is never deleted.
    """
    if len(genome.conn_genes) <= 1:
        return NO_PENDING

    candidates = []
    for innov, conn in genome.conn_genes.items():
        if conn.node_in == conn.node_out:
            candidates.append(innov)
        elif conn.active:
            reachable = genome.reachable_from_inputs(excluded=innov)
            if conn.node_in in reachable and conn.node_out in reachable:
                candidates.append(innov)

    if candidates:
        genome.delete_connection(random.choice(candidates))
    return NO_PENDING

_OPERATORS: dict[MutationType, Callable[['Genome'], Pending]] = {
    MutationType.WEIGHT            : mutate_weight,
    MutationType.CONNECTION_ADD    : add_connection,
    MutationType.NODE_ADD          : add_node,
    MutationType.GATER_ADD         : add_gater,
    MutationType.GATER_REMOVE      : remove_gater,
    MutationType.CONNECTION_ENABLE : enable_connection,
    MutationType.CONNECTION_DISABLE: disable_connection,
    MutationType.ACTIVATION        : mutate_activation,
}

_PRUNING_OPERATORS: list[Callable[['Genome'], Pending]] = [prune_node, prune_connection]
