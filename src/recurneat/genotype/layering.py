"""
Layering Module

This module computes the evaluation order of a genome and the derived
properties that depend on it.

Networks are allowed to contain cycles (recurrent connections), so the
ordering is not a strict topological sort. Nodes are stacked in layers:
layer 0 holds the input nodes, the last layer the output nodes, and in
between hidden nodes are ordered by their shortest feedforward distance
from the inputs. Nodes that cannot be reached that way are attached to the
layer of a node they are connected to; nodes connected to nothing layered
are idle and are skipped during evaluation. A connection is recurrent exactly
when its source does not sit in an earlier layer than its destination.

Functions:
    sort_layers(genome):       Recompute layers, idle nodes and recurrent flags
    update_free_nodes(genome): Recompute, for each node, the legal targets of a new connection
"""

from typing import TYPE_CHECKING

from recurneat.genotype.node_gene import NodeKey, NodeType
if TYPE_CHECKING:
    from recurneat.genotype.genome import Genome

def sort_layers(genome: 'Genome') -> None:
    """
    Recompute the layer ordering, the idle set and the recurrent flag of every connection.

    A single layering pass reads the recurrent flags left behind by the previous
    pass, and re-derives them at the end. Passes are repeated until neither the
    layers nor the flags change, so the stored result is a fixed point: calling
    this function again on an already layered genome changes nothing.
    The number of passes is bounded by the number of nodes, so this always terminates.

    Parameters:
        genome: the genome to layer (modified in place)
    """
    for _ in range(len(genome.node_genes) + 1):
        layers_before = genome.layers
        flags_before  = {innov: conn.recurrent for innov, conn in genome.conn_genes.items()}

        _layering_pass(genome)

        flags_after = {innov: conn.recurrent for innov, conn in genome.conn_genes.items()}
        if genome.layers == layers_before and flags_after == flags_before:
            break

def _layering_pass(genome: 'Genome') -> None:
    """
    One round of layering (see 'sort_layers').
    """
    input_keys  = {key for key, node in genome.node_genes.items() if node.type == NodeType.INPUT}
    output_keys = {key for key, node in genome.node_genes.items() if node.type == NodeType.OUTPUT}
    layers      = [set(input_keys), set(output_keys)]

    # Scan connections in innovation order, so that ties are always resolved the same way
    connections = [genome.conn_genes[innov] for innov in sorted(genome.conn_genes)]

    # Feedforward predecessors of each node (as flagged by the previous pass)
    predecessors: dict[NodeKey, set[NodeKey]] = {}
    for conn in connections:
        if conn.active and not conn.recurrent:
            predecessors.setdefault(conn.node_out, set()).add(conn.node_in)

    # Step 1: a node goes in the next layer once all its feedforward
    # predecessors have been layered in earlier rounds.
    layered = input_keys | output_keys
    while True:
        next_layer = {key for key in genome.node_genes
                      if key not in layered and key in predecessors and predecessors[key] <= layered}
        if not next_layer:
            break
        layers.insert(len(layers) - 1, next_layer)
        layered |= next_layer

    # Step 2: glue the leftover nodes to the layer of any layered node
    # they are actively connected to, in either direction.
    layer_of = {key: index for index, layer in enumerate(layers) for key in layer}

    neighbours: dict[NodeKey, list[NodeKey]] = {}
    for conn in connections:
        if conn.active:
            neighbours.setdefault(conn.node_out, []).append(conn.node_in)
            neighbours.setdefault(conn.node_in,  []).append(conn.node_out)

    leftover = sorted(key for key in genome.node_genes if key not in layered)
    while leftover:
        glued = {}
        for key in leftover:
            for other in neighbours.get(key, []):
                if other in layer_of:
                    glued[key] = layer_of[other]
                    break
        if not glued:
            break
        for key, index in glued.items():
            layers[index].add(key)
            layer_of[key] = index
        leftover = [key for key in leftover if key not in glued]

    # Step 3: the first and last layers are reserved for inputs and outputs;
    # anything glued to them stays put and the true inputs/outputs move out.
    if layers[0] != input_keys:
        layers[0] -= input_keys
        layers.insert(0, set(input_keys))
    if layers[-1] != output_keys:
        layers[-1] -= output_keys
        layers.append(set(output_keys))

    # Step 4: derive the recurrent flags from the final layer indices
    layer_of = {key: index for index, layer in enumerate(layers) for key in layer}
    for conn in connections:
        if conn.node_in in layer_of and conn.node_out in layer_of:
            conn.recurrent = layer_of[conn.node_in] >= layer_of[conn.node_out]

    genome.layers = layers
    genome.idle   = set(leftover)

def update_free_nodes(genome: 'Genome') -> None:
    """
    Recompute, for every node, the nodes a new connection starting there may end at.

    Feedforward targets exclude:
     + nodes already reached by an active non-recurrent connection from this node
     + the node itself
     + input->input, output->output and output->input pairs
    Recurrent targets exclude:
     + nodes already reached by an active recurrent connection from this node
     + input->input pairs

    Must run after every structural change, before the sets are read again.

    Parameters:
        genome: the genome whose nodes are updated (modified in place)
    """
    forward_out  : dict[NodeKey, set[NodeKey]] = {}
    recurrent_out: dict[NodeKey, set[NodeKey]] = {}
    for conn in genome.conn_genes.values():
        if conn.active:
            taken = recurrent_out if conn.recurrent else forward_out
            taken.setdefault(conn.node_in, set()).add(conn.node_out)

    for key, node in genome.node_genes.items():
        taken_forward   = forward_out.get(key, set())
        taken_recurrent = recurrent_out.get(key, set())

        node.free_forward = {
            other for other, target in genome.node_genes.items()
            if other != key
            and other not in taken_forward
            and not (node.type == NodeType.INPUT  and target.type == NodeType.INPUT)
            and not (node.type == NodeType.OUTPUT and target.type == NodeType.OUTPUT)
            and not (node.type == NodeType.OUTPUT and target.type == NodeType.INPUT)
        }

        node.free_recurrent = {
            other for other, target in genome.node_genes.items()
            if other not in taken_recurrent
            and not (node.type == NodeType.INPUT and target.type == NodeType.INPUT)
        }
