"""
Unit tests for the layering of genomes and the connection candidate sets.
"""

import pytest

from recurneat.genotype           import Genome, NodeGene, NodeKey, NodeType
from recurneat.genotype.layering  import sort_layers, update_free_nodes


# ============================================================================
# Fixtures
# ============================================================================

H1 = NodeKey(20)
H2 = NodeKey(21)


@pytest.fixture
def genome(config):
    return Genome(config)


def add_hidden(genome, key, activation="tanh"):
    genome.node_genes[key] = NodeGene(key, NodeType.HIDDEN, activation)


def layer_index(genome):
    return {key: index for index, layer in enumerate(genome.layers) for key in layer}


# ============================================================================
# Layers
# ============================================================================

class TestLayers:

    def test_minimal_genome(self, genome, keys):
        assert genome.layers == [{keys['bias'], keys['in1'], keys['in2']}, {keys['out']}]
        assert genome.idle == set()

    def test_direct_connections(self, genome, keys, connect):
        connect(genome, keys['bias'], keys['out'], 0.5, 10)
        connect(genome, keys['in1'],  keys['out'], 1.0, 11)
        connect(genome, keys['in2'],  keys['out'], 1.0, 12)
        genome.refresh()

        assert genome.layers == [{keys['bias'], keys['in1'], keys['in2']}, {keys['out']}]
        assert not any(conn.recurrent for conn in genome.conn_genes.values())

    def test_chain(self, genome, keys, connect):
        add_hidden(genome, H1)
        connect(genome, keys['in1'], H1, 1.0, 10)
        connect(genome, H1, keys['out'], 1.0, 11)
        genome.refresh()

        assert genome.layers == [{keys['bias'], keys['in1'], keys['in2']}, {H1}, {keys['out']}]
        assert not any(conn.recurrent for conn in genome.conn_genes.values())

    def test_self_loop_is_recurrent(self, genome, keys, connect):
        add_hidden(genome, H1)
        connect(genome, keys['in1'], H1, 1.0, 10)
        connect(genome, H1, keys['out'], 1.0, 11)
        connect(genome, H1, H1, 1.0, 12)
        genome.refresh()

        assert genome.layers == [{keys['bias'], keys['in1'], keys['in2']}, {H1}, {keys['out']}]
        assert genome.conn_genes[12].recurrent is True
        assert genome.conn_genes[10].recurrent is False
        assert genome.conn_genes[11].recurrent is False

    def test_cycle_is_broken_by_one_recurrent_connection(self, genome, keys, connect):
        add_hidden(genome, H1)
        add_hidden(genome, H2)
        connect(genome, keys['in1'], H1, 1.0, 10)
        connect(genome, H1, H2, 1.0, 11)
        connect(genome, H2, H1, 1.0, 12)
        connect(genome, H2, keys['out'], 1.0, 13)
        genome.refresh()

        assert genome.layers == [{keys['bias'], keys['in1'], keys['in2']}, {H1}, {H2}, {keys['out']}]
        assert genome.conn_genes[12].recurrent is True
        assert [genome.conn_genes[i].recurrent for i in (10, 11, 13)] == [False, False, False]

    def test_output_feeding_back_is_recurrent(self, genome, keys, connect):
        connect(genome, keys['in1'], keys['out'], 1.0, 10)
        connect(genome, keys['out'], keys['in1'], 1.0, 11)
        genome.refresh()

        assert genome.conn_genes[10].recurrent is False
        assert genome.conn_genes[11].recurrent is True

    def test_unconnected_hidden_node_is_idle(self, genome, keys):
        add_hidden(genome, H1)
        genome.refresh()

        assert H1 in genome.idle
        assert all(H1 not in layer for layer in genome.layers)

    def test_island_is_idle(self, genome, keys, connect):
        add_hidden(genome, H1)
        add_hidden(genome, H2)
        connect(genome, H1, H2, 1.0, 10)
        connect(genome, H2, H1, 1.0, 11)
        genome.refresh()

        assert genome.idle == {H1, H2}

    def test_node_fed_only_backwards_is_glued_and_layered(self, genome, keys, connect):
        """A node with no feedforward path from the inputs still gets a layer."""
        add_hidden(genome, H1)
        connect(genome, keys['out'], H1, 1.0, 10)
        connect(genome, H1, keys['out'], 1.0, 11)
        genome.refresh()

        assert H1 not in genome.idle
        assert genome.layers[0]  == {keys['bias'], keys['in1'], keys['in2']}
        assert genome.layers[-1] == {keys['out']}
        assert sum(H1 in layer for layer in genome.layers) == 1

    def test_inactive_connections_are_ignored(self, genome, keys, connect):
        add_hidden(genome, H1)
        connect(genome, keys['in1'], H1, 1.0, 10, active=False)
        genome.refresh()

        assert H1 in genome.idle


# ============================================================================
# Invariants
# ============================================================================

class TestLayeringInvariants:

    @pytest.fixture
    def tangled(self, genome, keys, connect):
        """Several hidden nodes, cycles, self-loops and an inactive connection."""
        h3 = NodeKey(22)
        for key in (H1, H2, h3):
            add_hidden(genome, key)
        connect(genome, keys['in1'], H1, 1.0, 10)
        connect(genome, H1, H2, 1.0, 11)
        connect(genome, H2, h3, 1.0, 12)
        connect(genome, h3, H1, 1.0, 13)
        connect(genome, h3, keys['out'], 1.0, 14)
        connect(genome, keys['out'], H2, 1.0, 15)
        connect(genome, H2, H2, 1.0, 16)
        connect(genome, keys['in2'], h3, 1.0, 17, active=False)
        genome.refresh()
        return genome

    def test_every_node_in_one_layer_or_idle(self, tangled):
        placed = [key for layer in tangled.layers for key in layer]
        assert len(placed) == len(set(placed))
        assert set(placed) | tangled.idle == set(tangled.node_genes)
        assert not set(placed) & tangled.idle

    def test_first_and_last_layers_reserved(self, tangled):
        inputs  = {k for k, n in tangled.node_genes.items() if n.type == NodeType.INPUT}
        outputs = {k for k, n in tangled.node_genes.items() if n.type == NodeType.OUTPUT}
        assert tangled.layers[0]  == inputs
        assert tangled.layers[-1] == outputs

    def test_recurrent_flag_matches_layer_order(self, tangled):
        index = layer_index(tangled)
        for conn in tangled.conn_genes.values():
            if conn.node_in in index and conn.node_out in index:
                assert conn.recurrent == (index[conn.node_in] >= index[conn.node_out])

    def test_layering_is_idempotent(self, tangled):
        layers = [set(layer) for layer in tangled.layers]
        flags  = {innov: conn.recurrent for innov, conn in tangled.conn_genes.items()}

        sort_layers(tangled)

        assert tangled.layers == layers
        assert {innov: conn.recurrent for innov, conn in tangled.conn_genes.items()} == flags

    def test_stale_flags_are_rederived(self, tangled):
        for conn in tangled.conn_genes.values():
            conn.recurrent = False
        sort_layers(tangled)

        index = layer_index(tangled)
        for conn in tangled.conn_genes.values():
            if conn.node_in in index and conn.node_out in index:
                assert conn.recurrent == (index[conn.node_in] >= index[conn.node_out])


# ============================================================================
# Candidate sets
# ============================================================================

class TestFreeNodes:

    def test_minimal_genome(self, genome, keys):
        inputs = {keys['bias'], keys['in1'], keys['in2']}
        everything = inputs | {keys['out']}

        assert genome.node_genes[keys['in1']].free_forward   == {keys['out']}
        assert genome.node_genes[keys['in1']].free_recurrent == {keys['out']}
        assert genome.node_genes[keys['out']].free_forward   == set()
        assert genome.node_genes[keys['out']].free_recurrent == everything

    def test_taken_feedforward_target_removed(self, genome, keys, connect):
        connect(genome, keys['in1'], keys['out'], 1.0, 10)
        genome.refresh()

        assert genome.node_genes[keys['in1']].free_forward   == set()
        assert genome.node_genes[keys['in1']].free_recurrent == {keys['out']}

    def test_taken_recurrent_target_removed(self, genome, keys, connect):
        connect(genome, keys['out'], keys['out'], 1.0, 10)
        genome.refresh()

        assert keys['out'] not in genome.node_genes[keys['out']].free_recurrent

    def test_inactive_connection_frees_its_target(self, genome, keys, connect):
        connect(genome, keys['in1'], keys['out'], 1.0, 10, active=False)
        genome.refresh()

        assert genome.node_genes[keys['in1']].free_forward == {keys['out']}

    def test_hidden_node_may_feed_anything_but_itself(self, genome, keys):
        add_hidden(genome, H1)
        update_free_nodes(genome)

        free = genome.node_genes[H1].free_forward
        assert free == {keys['bias'], keys['in1'], keys['in2'], keys['out']}
        assert H1 in genome.node_genes[H1].free_recurrent
        assert H1 in genome.node_genes[keys['in1']].free_forward
