"""
Default configuration for the SFRFs toolbox.

Shape parameter defaults follow the receptive-field set-up used for the
XJTU-SY style run-to-failure experiments (25.6 kHz sampling, 10 harmonics,
2 sidebands, narrow 4 Hz center band against a 12 Hz surround).
"""

# Shape parameters (one record per fault family)
SHAPE_DEFAULTS = {
    "order": 0,
    "num_harmonics": 10,
    "num_sidebands": 2,
    "center_bandwidth": 4.0,       # Hz, full width of the center band
    "center_sigma_rule": 6.0,      # sigma = bandwidth / (2 * rule)
    "surround_bandwidth": 12.0,    # Hz, full width of the surround band
    "surround_sigma_rule": 1.0,
    "inhibition_factor": 0.8,
}

SHAPE_FIELDS = tuple(SHAPE_DEFAULTS.keys())

# Fault frequency codes used in band labels
BPFO_CODE = "Fo"   # Ball pass frequency, outer race
BPFI_CODE = "Fi"   # Ball pass frequency, inner race
BSF_CODE = "Fb"    # Ball spin frequency
FTF_CODE = "Fc"    # Fundamental train frequency (cage)
FR_CODE = "Fr"     # Shaft rotational frequency

# Gain masks
MASK_GAUSSIAN = "gaussian"
MASK_SUPER_GAUSSIAN = "super_gaussian"
MASK_KINDS = (MASK_GAUSSIAN, MASK_SUPER_GAUSSIAN)
DEFAULT_SUPER_GAUSS_BETA = 2.0

# Operating condition columns
SPEED_COLUMN = "Speed"
LOAD_COLUMN = "Load"

# Ensemble member tables
SORT_FIELD = "SnapshotIndex"
SPECTRAL_SUFFIX = "_FFT"
SFRFS_SUFFIX = "_SFRFs"
DEFAULT_NUM_WORKERS = 2

# Snapshot defaults
DEFAULT_STRIDE = 1.0   # seconds between snapshots
