"""Batch run wrapper.

Builds a Translator from a SimulationConfig, pushes the address file
through it and writes the statistics report (plus any optional exports).
"""
import logging
from typing import Callable, List, Optional

from vmsim.core.config import SimulationConfig
from vmsim.core.simulator import MemorySimulator
from vmsim.core.translator import Translator
from vmsim.data.address_file import read_addresses
from vmsim.data.stats_export import (
    Exporter,
    export_chart_json,
    export_chart_pdf,
    write_report,
)

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimulationConfig):
        self.config = config.validate()
        self.translator: Optional[Translator] = None
        self.simulator: Optional[MemorySimulator] = None

    def _create_translator(self):
        # keep the translator across runs so state and counters accumulate
        if self.translator is not None:
            return
        self.translator = Translator.from_config(self.config)
        self.simulator = MemorySimulator(self.translator)

    def run_simulation(self, addresses: Optional[List[int]] = None,
                       callback: Optional[Callable[[dict], None]] = None) -> List[dict]:
        """Translate `addresses` (or the configured address file).

        Returns the per-step info dicts.
        """
        self._create_translator()
        if addresses is None:
            addresses = read_addresses(self.config.addresses)
            logger.info("read %d addresses from %s", len(addresses), self.config.addresses)
        self.simulator.load_sequence(addresses)

        results = []

        def _collect(info):
            results.append(info)
            if callback:
                callback(info)

        self.simulator.run_all(_collect)
        return results

    def write_outputs(self, chart_json: Optional[str] = None, chart_pdf: Optional[str] = None,
                      csv_path: Optional[str] = None) -> List[str]:
        if self.translator is None:
            raise RuntimeError("run_simulation() must be called before write_outputs()")
        stats = self.translator.stats
        written = [write_report(self.config.stats_path, stats, self.translator.frame_snapshot())]
        if chart_json:
            written.append(export_chart_json(stats.tlb_hit_rate_history, stats.as_dict(), chart_json,
                                             fault_rate_history=stats.page_fault_rate_history))
        if chart_pdf:
            written.append(export_chart_pdf(stats.tlb_hit_rate_history, chart_pdf,
                                            fault_rate_history=stats.page_fault_rate_history))
        if csv_path:
            written.append(Exporter.export_stats_csv(csv_path, stats))
        for path in written:
            logger.info("wrote %s", path)
        return written

    def close(self):
        if self.translator is not None:
            self.translator.close()
            self.translator = None
            self.simulator = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
