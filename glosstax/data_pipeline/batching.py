"""
Batch Processing

Fans per-item work out to a thread pool in fixed-size batches and waits for
every batch before returning. Each batch returns an independent BatchOutput
keyed by batch id; a recoverable per-item error is recorded as a
StageFailure without aborting the other items of the batch.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Tuple, Type

from tqdm import tqdm

from ..exceptions import GlossTaxError


logger = logging.getLogger(__name__)


@dataclass
class StageFailure:
    """An item a stage could not process."""
    item: Any
    error: Exception

    def __str__(self):
        return f"{self.item}: {type(self.error).__name__}: {self.error}"


@dataclass
class BatchOutput:
    """Results of one batch."""
    batch_id: int
    results: List[Any] = field(default_factory=list)
    failures: List[StageFailure] = field(default_factory=list)
    elapsed: float = 0.0


def make_batches(items: Iterable, batch_size: int) -> Iterator[List]:
    """Split items into lists of batch_size (the last one may be shorter)."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    batch = []
    for item in items:
        batch.append(item)
        if len(batch) == batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


def process_batch(batch_id: int, batch: List, work: Callable[[Any], Any],
                  recoverable: Tuple[Type[Exception], ...]) -> BatchOutput:
    """Apply work to every item of a batch, recording recoverable failures."""
    start_time = time.time()
    output = BatchOutput(batch_id)
    logger.debug(f"[batch {batch_id}] Execution started on {len(batch)} items")

    for item in batch:
        try:
            output.results.append(work(item))
        except recoverable as e:
            logger.warning(f"[batch {batch_id}] Skipping {item}: {e}")
            output.failures.append(StageFailure(item, e))

    output.elapsed = time.time() - start_time
    logger.debug(f"[batch {batch_id}] Execution finished in {output.elapsed:.2f} s")
    return output


def run_in_batches(items: Iterable, work: Callable[[Any], Any],
                   batch_size: int = 100,
                   max_workers: int = 4,
                   desc: str = "Processing",
                   show_progress: bool = False,
                   recoverable: Tuple[Type[Exception], ...] = (GlossTaxError,)) -> Dict[int, BatchOutput]:
    """
    Run work over items in a thread pool, one future per batch.

    Args:
        items: Input items
        work: Function applied to each item
        batch_size: Items per batch
        max_workers: Thread pool size
        desc: Progress bar label
        show_progress: Display a tqdm progress bar over batches
        recoverable: Exception types recorded as per-item failures; any
            other exception propagates

    Returns:
        Dictionary from batch id (1-based) to BatchOutput
    """
    outputs: Dict[int, BatchOutput] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(process_batch, batch_id, batch, work, recoverable)
            for batch_id, batch in enumerate(make_batches(items, batch_size), 1)
        ]
        for future in tqdm(as_completed(futures), total=len(futures), desc=desc, disable=not show_progress):
            output = future.result()
            outputs[output.batch_id] = output

    return outputs


def collect_results(outputs: Dict[int, BatchOutput]) -> List:
    """Concatenate batch results in batch order."""
    return [result for batch_id in sorted(outputs) for result in outputs[batch_id].results]


def collect_failures(outputs: Dict[int, BatchOutput]) -> List[StageFailure]:
    return [failure for batch_id in sorted(outputs) for failure in outputs[batch_id].failures]
