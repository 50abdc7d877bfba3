"""
Belt trick: 360° vs 720° rotation loops in SO(3).

Demonstrates:
- Loop generation with boundary-jump detection
- Lifting to SU(2) and classification in π₁(SO(3)) = Z/2
- The 720° null-homotopy, stage by stage
- CSV logging of the sampled loops
"""
import math
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from so3lab import (
    PathLogger,
    classify_loop,
    contraction_stages,
    lift_path,
    loop_from_preset,
)
from so3lab.topology.ball import point_radius
from so3lab.topology.loops import detect_jumps
from so3lab.utils.io import save_loop_history


def describe_loop(name: str) -> None:
    loop = loop_from_preset(name)
    lifted = lift_path(loop.points)

    print(f"\n{name}:")
    print(f"  Total angle: {math.degrees(loop.total_angle):.0f}°")
    print(f"  Samples: {loop.num_samples + 1}")
    print(f"  Boundary jumps at: {list(loop.jump_indices)}")
    print(f"  Lift start: {lifted.start}")
    print(f"  Lift end:   {lifted.end}")
    print(f"  Class: {classify_loop(loop.points).name}")


def main():
    """Compare the 360° and 720° loops and contract the latter."""
    print("=" * 60)
    print("Belt Trick")
    print("=" * 60)

    for name in ("loop_2pi", "loop_4pi"):
        describe_loop(name)

    print("\nContraction of the 720° loop:")
    stages = contraction_stages((1.0, 0.0, 0.0))
    for k, points in enumerate(stages):
        s = k / (len(stages) - 1)
        radius = max(point_radius(p) for p in points)
        print(
            f"  s={s:.1f}  max radius={radius:.3f}  "
            f"jumps={len(detect_jumps(points))}  class={classify_loop(points).name}"
        )

    output_dir = Path("output") / "belt_trick"
    with PathLogger(output_dir / "loops.csv") as logger:
        logger.log(loop_from_preset("loop_2pi"))
        logger.log(loop_from_preset("loop_4pi"))
    print(f"\nLogged {logger.runs} loops to {logger.filepath}")

    save_loop_history(loop_from_preset("loop_4pi"), output_dir / "loop_4pi.csv")


if __name__ == "__main__":
    main()
