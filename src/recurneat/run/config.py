import configparser
import os
from recurneat.activations import activations

class Config:

    @staticmethod
    def _parse_activation_options(raw_options):
        """
        Parse activation_options from string to list.

        Parameters:
            raw_options: Either "all", a comma-separated list, or already a list

        Returns:
            List of activation function names
        """
        # If already a list, return as-is
        if isinstance(raw_options, list):
            return raw_options

        # Parse string values
        if raw_options == 'all':
            return list(activations.keys())
        else:
            # Parse comma-separated list
            parsed = [opt.strip() for opt in raw_options.split(',')]
            for opt in parsed:
                if opt not in activations:
                    raise ValueError(f"Invalid activation function '{opt}' in activation_options")
            return parsed

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config populated with default values,
                         which can then be adjusted by setting attributes manually.
        """

        # Default config for testing/manual setup
        if config_file is None:

            # Population and network shape
            self.population_size      = 50
            self.num_inputs           = 2
            self.num_outputs          = 1
            self.max_inputs           = 2
            self.max_outputs          = 1
            self.initial_cxn_policy   = "mutate"
            self.initial_cxn_fraction = None
            self.recurrence           = True
            self.memory_blend         = 1.0

            # Nodes
            self.activation_io      = "tanh"
            self.activation_options = list(activations.keys())

            # Connections
            self.min_weight            = -9.9
            self.max_weight            =  9.9
            self.weight_init_range     =  5.0
            self.weight_replace_prob   =  0.1
            self.weight_perturb_scale  =  8.0
            self.weight_perturb_offset =  4
            self.recurrent_add_prob    =  0.25

            # Operator selection weights (need not sum to anything in particular)
            self.weight_mutate_chance       = 200
            self.connection_add_chance      = 20
            self.node_add_chance            = 5
            self.gater_add_chance           = 10
            self.gater_remove_chance        = 3
            self.connection_enable_chance   = 0
            self.connection_disable_chance  = 0
            self.activation_mutate_chance   = 0
            self.prune_enabled              = False
            self.prune_ratio                = 0.0

            # Speciation
            self.compatibility_threshold   = 3.0
            self.distance_excess_coeff     = 1.0
            self.distance_disjoint_coeff   = 1.0
            self.distance_weight_coeff     = 0.4
            self.distance_activation_coeff = 0.5
            self.target_species            = 5
            self.threshold_step            = 0.1
            self.threshold_min             = 0.3
            self.threshold_max             = 10.0

            # Reproduction
            self.generational           = True
            self.fitness_history_length = 15
            self.drop_stagnant_species  = False

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of genomes in the population.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The number of declared input nodes (the bias node is not counted).
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int)

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int)

        # The number of input and output slots reserved for growth.
        # Node keys are allocated for all of them up front, so a genome
        # can later gain inputs/outputs without breaking gene alignment.
        self.max_inputs  = get_value('POPULATION_INIT', 'max_inputs',  int, default=self.num_inputs)
        self.max_outputs = get_value('POPULATION_INIT', 'max_outputs', int, default=self.num_outputs)

        # Specifies the initial connectivity of newly-created networks.
        # Allowed values:
        #   "mutate"  - a few waves of connection-add mutations, reconciled by the ledger
        #   "partial" - a fraction of all possible input->output connections
        #   "full"    - connect all input nodes (bias included) to all output nodes
        self.initial_cxn_policy = get_value('POPULATION_INIT', 'initial_cxn_policy', str, default="mutate")

        # The fraction of connections to instantiate (only applicable
        # if the initial connection policy is "partial").
        self.initial_cxn_fraction = get_value('POPULATION_INIT', 'initial_cxn_fraction', float, default=None)

        # Whether genomes may grow recurrent connections.
        self.recurrence = get_value('POPULATION_INIT', 'recurrence', bool, default=True)

        # Blend coefficient of the previous-tick value read by recurrent connections:
        #   old = old * (1 - memory_blend) + value * memory_blend
        # A value of 1.0 means no smoothing.
        self.memory_blend = get_value('POPULATION_INIT', 'memory_blend', float, default=1.0)

        # [NODE]

        # Activation function of output nodes and of newly created hidden nodes.
        self.activation_io = get_value('NODE', 'activation_io', str, default="tanh")
        if self.activation_io not in activations:
            raise ValueError(f"Invalid activation function '{self.activation_io}' in activation_io")

        # Which activation functions are available for mutation.
        # Options: "all", or comma-separated list
        raw_options = get_value('NODE', 'activation_options', str, default='all')
        self.activation_options = self._parse_activation_options(raw_options)

        # [CONNECTION]

        # The minimum and maximum allowed 'weight' values.
        # Weights outside this range will be clamped to this range.
        self.min_weight = get_value('CONNECTION', 'min_weight', float, default=-9.9)
        self.max_weight = get_value('CONNECTION', 'max_weight', float, default= 9.9)

        # New and replaced weights are drawn uniformly from [-weight_init_range, weight_init_range].
        self.weight_init_range = get_value('CONNECTION', 'weight_init_range', float, default=5.0)

        # The probability that a weight mutation replaces the weight
        # instead of perturbing it.
        self.weight_replace_prob = get_value('CONNECTION', 'weight_replace_prob', float, default=0.1)

        # The standard deviation of a weight perturbation decays with the genome generation:
        #   stdev = weight_perturb_scale / (generation + weight_perturb_offset)
        self.weight_perturb_scale  = get_value('CONNECTION', 'weight_perturb_scale',  float, default=8.0)
        self.weight_perturb_offset = get_value('CONNECTION', 'weight_perturb_offset', int,   default=4)

        # The probability that a connection-add mutation attempts a recurrent
        # connection (only when recurrence is allowed).
        self.recurrent_add_prob = get_value('CONNECTION', 'recurrent_add_prob', float, default=0.25)

        # [MUTATION]

        # Relative odds of each mutation operator; exactly one is applied per mutation.
        self.weight_mutate_chance      = get_value('MUTATION', 'weight_mutate_chance',      int, default=200)
        self.connection_add_chance     = get_value('MUTATION', 'connection_add_chance',     int, default=20)
        self.node_add_chance           = get_value('MUTATION', 'node_add_chance',           int, default=5)
        self.gater_add_chance          = get_value('MUTATION', 'gater_add_chance',          int, default=10)
        self.gater_remove_chance       = get_value('MUTATION', 'gater_remove_chance',       int, default=3)
        self.connection_enable_chance  = get_value('MUTATION', 'connection_enable_chance',  int, default=0)
        self.connection_disable_chance = get_value('MUTATION', 'connection_disable_chance', int, default=0)
        self.activation_mutate_chance  = get_value('MUTATION', 'activation_mutate_chance',  int, default=0)

        # Whether pruning operators may replace the operator above, and how often.
        self.prune_enabled = get_value('MUTATION', 'prune_enabled', bool,  default=False)
        self.prune_ratio   = get_value('MUTATION', 'prune_ratio',   float, default=0.0)

        # [SPECIATION]

        # Genomes whose distance is less than this threshold are considered
        # to be in the same species. This is only the starting value, the
        # threshold is adjusted after each speciation pass.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # Coefficients of the excess, disjoint, weight difference and
        # activation mismatch terms of the distance.
        self.distance_excess_coeff     = get_value('SPECIATION', 'distance_excess_coeff',     float, default=1.0)
        self.distance_disjoint_coeff   = get_value('SPECIATION', 'distance_disjoint_coeff',   float, default=1.0)
        self.distance_weight_coeff     = get_value('SPECIATION', 'distance_weight_coeff',     float, default=0.4)
        self.distance_activation_coeff = get_value('SPECIATION', 'distance_activation_coeff', float, default=0.5)

        # The number of species the threshold controller steers toward,
        # its step, and the range the threshold is clamped to.
        self.target_species = get_value('SPECIATION', 'target_species', int,   default=5)
        self.threshold_step = get_value('SPECIATION', 'threshold_step', float, default=0.1)
        self.threshold_min  = get_value('SPECIATION', 'threshold_min',  float, default=0.3)
        self.threshold_max  = get_value('SPECIATION', 'threshold_max',  float, default=10.0)

        # [REPRODUCTION]

        # Generational (whole population replaced at once) or
        # continuous (one offspring at a time) reproduction.
        self.generational = get_value('REPRODUCTION', 'generational', bool, default=True)

        # How many past fitness values each species remembers.
        self.fitness_history_length = get_value('REPRODUCTION', 'fitness_history_length', int, default=15)

        # Whether stagnant species (no improvement over the remembered history)
        # are denied offspring, the best species excepted.
        self.drop_stagnant_species = get_value('REPRODUCTION', 'drop_stagnant_species', bool, default=False)

    @property
    def mutation_chances(self) -> list[int]:
        """
        The operator selection weights, in the order of 'MutationType'.
        """
        return [self.weight_mutate_chance,
                self.connection_add_chance,
                self.node_add_chance,
                self.gater_add_chance,
                self.gater_remove_chance,
                self.connection_enable_chance,
                self.connection_disable_chance,
                self.activation_mutate_chance]

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse activation_options when set.
        This allows users to write config.activation_options = "relu, tanh" and
        have it automatically converted to a list of activation names.
        """
        if name == 'activation_options':
            value = self._parse_activation_options(value)
        super().__setattr__(name, value)
