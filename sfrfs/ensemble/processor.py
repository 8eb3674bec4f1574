"""
Ensemble processor: runs the SFRF pipeline over every ensemble member.

Bands and gain masks are built once from the shared inputs. Members are
then processed independently on a thread pool; there is no ordering
guarantee between members. A failing member is logged and recorded while
the others keep running. When all members are done, recorded failures are
raised together as one EnsembleProcessingError.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from sfrfs import config
from sfrfs.bands.frequency_bands import generate_bands
from sfrfs.errors import EnsembleProcessingError, ValidationError
from sfrfs.masks.gain_functions import synthesize_gain_functions
from sfrfs.parameters.validators import require_integer
from sfrfs.response.compute import compute_response
from sfrfs.utils import resolve_logger


def _is_valid_spectrum_column(cells):
    shapes = []
    for cell in cells:
        array = np.asarray(cell)
        if array.size == 0 or not np.issubdtype(array.dtype, np.number):
            return False
        shapes.append(array.shape)
    return len(shapes) > 0 and all(shape == shapes[0] for shape in shapes)


class EnsembleProcessor:
    """
    Args:
        broker (EnsembleBroker): Access to the member tables.
        snapshot_parameters (SnapshotParameters): Supplies the frequency axis.
        geometry (BearingGeometry): Bearing geometry.
        grid (OperatingConditionGrid): Operating conditions covered by the members.
        shape_parameters (ShapeParameterSet): Shape parameters per fault family.
        num_workers (int): Thread pool size (positive).
        mask (str): Gain mask kind, "gaussian" or "super_gaussian".
        beta (float): Super-Gaussian exponent.
        logger (Logger, optional): Logger instance shared by all workers.
    """

    def __init__(self, broker, snapshot_parameters, geometry, grid, shape_parameters,
                 num_workers=config.DEFAULT_NUM_WORKERS, mask=config.MASK_GAUSSIAN,
                 beta=config.DEFAULT_SUPER_GAUSS_BETA, logger=None):
        if broker is None:
            raise ValidationError("Ensemble cannot be empty.")
        self.broker = broker
        self.snapshot_parameters = snapshot_parameters
        self.geometry = geometry
        self.grid = grid
        self.shape_parameters = shape_parameters
        self.num_workers = require_integer("num_workers", num_workers, minimum=1)
        self.mask = mask
        self.beta = beta
        self.logger = resolve_logger(logger)

        self.band_table = None
        self.gain_masks = None

    def prepare(self):
        """Build the band table (once) and the gain masks on the snapshot frequency axis."""
        if self.band_table is None:
            self.logger.info("SFRF-Ensemble: Empty frequency bands, computing bands.")
            self.band_table = generate_bands(self.geometry, self.grid, self.shape_parameters, self.logger)
        self.gain_masks = synthesize_gain_functions(
            self.band_table, self.snapshot_parameters.frequency_axis(), self.shape_parameters,
            mask=self.mask, beta=self.beta, logger=self.logger)
        return self.gain_masks

    def validate_spectrum_columns(self, frame):
        for column in self.broker.temporal_columns:
            spectral = self.broker.map_to_spectral_column(column)
            if spectral not in frame.columns or not _is_valid_spectrum_column(frame[spectral]):
                raise ValidationError(f'FFT column "{spectral}" missing or invalid')

    def compute_member(self, frame):
        """
        Add one ``<signal>_SFRFs`` column per temporal signal to a member table.

        The operating condition is read from the first row. Each SFRF cell holds
        the responses of all fault families for that snapshot.

        Returns:
            pd.DataFrame: Copy of the member table with the response columns.
        """
        if self.gain_masks is None:
            self.prepare()
        self.validate_spectrum_columns(frame)

        frame = frame.copy()
        condition = frame.iloc[0][[config.SPEED_COLUMN, config.LOAD_COLUMN]].to_dict()

        for column in self.broker.temporal_columns:
            sfrf_column = self.broker.map_to_sfrf_column(column)
            self.logger.debug(f'SFRF-Ensemble: Processing input: "{column}", output: "{sfrf_column}"...', 2)

            spectra = np.column_stack([np.asarray(cell).ravel()
                                       for cell in frame[self.broker.map_to_spectral_column(column)]])
            responses = compute_response(
                self.gain_masks, self.shape_parameters, condition,
                spectrum=spectra, logger=self.logger).as_matrix()

            frame[sfrf_column] = [responses[:, i].copy() for i in range(responses.shape[1])]
            self.logger.debug(f'SFRF-Ensemble: Done processing "{column}"', 2)

        return frame

    def _process_one(self, member_id, compute):
        self.logger.info(f"SFRF-Ensemble: Worker processing {member_id} ...")
        frame = self.broker.load(member_id)
        frame = compute(frame)
        self.broker.save(member_id, frame)
        return member_id

    def process(self, compute=None):
        """
        Process every member of the ensemble.

        Args:
            compute (callable, optional): ``compute(frame) -> frame``; defaults to
                ``compute_member``.

        Returns:
            list: Identifiers of the members processed successfully.

        Raises:
            EnsembleProcessingError: After all members finished, if any of them failed.
        """
        members = self.broker.get_members()
        if not members:
            raise ValidationError("Cannot process: ensemble has no members.")

        if compute is None:
            self.prepare()
            compute = self.compute_member

        self.logger.info(f"SFRF-Ensemble: Running with {self.num_workers} workers.")

        done = []
        failures = {}
        with ThreadPoolExecutor(max_workers=self.num_workers) as pool:
            futures = {pool.submit(self._process_one, member_id, compute): member_id
                       for member_id in members}
            for future in as_completed(futures):
                member_id = futures[future]
                try:
                    done.append(future.result())
                except Exception as e:
                    self.logger.warning(f"SFRF-Ensemble: Error processing member {member_id}: {e}")
                    failures[member_id] = e

        self.raise_if_failed(failures)
        return done

    def raise_if_failed(self, failures):
        if not failures:
            return
        message = "; ".join(f"member {member_id}: {error}" for member_id, error in failures.items())
        self.logger.warning(f"SFRF-Ensemble: {message}")
        error = EnsembleProcessingError(message, causes=failures)
        # First cause chained, all of them in error.causes
        raise error from next(iter(failures.values()))
