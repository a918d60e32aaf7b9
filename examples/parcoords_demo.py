from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from parcoords import ParcoordsSession, PointerEvent


def _write_events_csv(path: Path, count: int = 600) -> None:
    rng = np.random.default_rng(7)
    time = np.arange(count, dtype=np.float64)
    event_type = rng.integers(0, 9, size=count)
    cpu_id = rng.integers(0, 8, size=count)
    disk = np.clip(rng.normal(50.0, 18.0, size=count), 0.0, 100.0)
    memory = np.clip(disk * 0.6 + rng.normal(20.0, 10.0, size=count), 0.0, 100.0)
    lines = ["time,event_type,cpu_id,disk_usage,memory_usage"]
    for i in range(count):
        # Sprinkle some gaps so broken polylines show up.
        mem = "" if i % 37 == 0 else f"{memory[i]:.2f}"
        lines.append(f"{time[i]:.0f},{event_type[i]},{cpu_id[i]},{disk[i]:.2f},{mem}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _drag(session: ParcoordsSession, axis_index: int, y0: float, y1: float) -> None:
    cfg = session.config
    x = cfg.margins.left + session.layout.x_position_of(axis_index)
    session.handle_pointer(PointerEvent(event_type="pointer_down", x=x, y=cfg.margins.top + y0))
    session.handle_pointer(PointerEvent(event_type="pointer_move", x=x, y=cfg.margins.top + y1))
    session.handle_pointer(PointerEvent(event_type="pointer_up", x=x, y=cfg.margins.top + y1))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    csv_path = out_dir / "events.csv"
    _write_events_csv(csv_path)

    session = ParcoordsSession.from_csv(csv_path)
    session.start()
    session.render_queue.run_until_idle()
    full_path = session.save_png(out_dir / "parcoords_full.png")

    _drag(session, 3, 60.0, 200.0)
    _drag(session, 2, 0.0, 240.0)
    session.render_queue.run_until_idle()
    brushed_path = session.save_png(out_dir / "parcoords_brushed.png")

    table_path = out_dir / "parcoords_table.txt"
    table_path.write_text(session.table.render_ascii() + "\n", encoding="utf-8")

    print(f"wrote {full_path}")
    print(f"wrote {brushed_path}")
    print(f"wrote {table_path}")


if __name__ == "__main__":
    main()
