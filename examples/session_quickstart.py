"""
Planning session quickstart for armtraj.
- Chains two minimum-jerk plans through one session
- Prints endpoints, accumulated cost and limit checks

Run from the repository root:
    python examples/session_quickstart.py
"""

import logging

from armtraj import PlanningSession

TARGETS = [
    [0.5, -0.8, 1.2, 0.0, 0.4, -0.3],
    [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    session = PlanningSession()
    for target in TARGETS:
        result = session.plan_to(target, T=1.5, dt=0.02)
        first, last = result.samples[0], result.samples[-1]
        print(f"start q: {first.position.round(3).tolist()}")
        print(f"end   q: {last.position.round(3).tolist()} at t={last.t}")
        print(f"samples: {len(result.samples)}  J={result.cost:.3f}  within limits: {result.within_limits}")
    print("session pose:", session.state.q.tolist())


if __name__ == "__main__":
    main()
