"""Global constants for the error-control course tooling."""

import os

# File names
DEFAULT_CONFIG_FILENAME = os.getenv("ERROR_CONTROL_CONFIG_FILENAME", "error_control.yaml")
DEFAULT_LOG_FILENAME = os.getenv("ERROR_CONTROL_LOG_FILENAME", "error_control.log")
MACROS_FILENAME = "latex_macros.md"
SIDEBAR_FILENAME = "sidebar.md"

# Logging
LOG_FORMAT = os.getenv(
    "ERROR_CONTROL_LOG_FORMAT", "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
)
DATE_FORMAT = os.getenv("ERROR_CONTROL_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
DEFAULT_LOG_LEVEL = os.getenv("ERROR_CONTROL_DEFAULT_LOG_LEVEL", "INFO")

# Notebooks
NOTEBOOK_HEADER = "import marimo"
NOTEBOOK_SUFFIX = ".py"
MACROS_DELIMITER = "# latex macros --- DO NOT TOUCH THIS LINE"
SIDEBAR_DELIMITER = "# sidebar --- DO NOT TOUCH THIS LINE"
COURSE_TITLE = "Error control in scientific modeling"
DEFAULT_NOTES_DIR = "notes"
DEFAULT_LECTURES_DIR = "lectures"
SIDEBAR_URL = "https://teaching.matmat.org/error-control/sidebar.md"

# DFT defaults (silicon demonstration)
DEFAULT_ELEMENT = "Si"
DEFAULT_CRYSTAL = "diamond"
DEFAULT_LATTICE_CONSTANT = 5.431  # Angstrom
DEFAULT_FUNCTIONAL = "PBE"
DEFAULT_PSEUDOPOTENTIAL = "Si.pbe-n-rrkjus_psl.1.0.0.UPF"
DEFAULT_ECUT = 20.0  # Hartree
DEFAULT_KGRID = (4, 4, 4)
DEFAULT_TOL = 1e-6
DEFAULT_N_BANDS = 10
DEFAULT_BAND_NPOINTS = 60
DEFAULT_PW_COMMAND = "pw.x"
DFT_PREFIX = "calc"
DEFAULT_DFT_WORKDIR = "_dft"
