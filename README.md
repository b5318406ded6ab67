# armplanner

Plan and animate joint trajectories for a planar three-link robot arm whose
end effector traces a circle.

The base of the arm is at the origin. Target points are sampled along the part
of the circle that the arm can reach (`Planner.points_sampler`). Joint angles
are then found with one of three planners:

- **Newton** (`Planner.plan_newton`) solves inverse kinematics one point at a
  time. Each solve starts from the previous solution. Obstacles are ignored.
- **Optimization** (`armplanner.optimization.plan_optimization`) minimises the
  sum of squared joint steps along the whole trajectory. It solves a KKT system
  with a sparse LU factorisation so that the end effector stays on every
  target, and chooses each step length by backtracking. The first pose comes
  from Newton's method and is stored as the planner's current pose. With one
  point or none, the current pose is returned unchanged. If the planner was
  built with `avoid_obstacles=True`, a penalty gradient pushes the collision
  circles of the first link away from obstacles.
- **Brute force** (`armplanner.graph_search.plan_brute_force`) samples the
  first joint on a grid of 360 values. For each value it solves the other two
  joints in closed form (elbow up and elbow down) and drops poses that
  `Planner.check_collision` rejects. Dijkstra's algorithm then finds the
  shortest path in joint space. Between consecutive points, the first joint may
  move at most one grid cell and no joint may move more than 10°. If no such
  path exists, the result is an empty list.

Obstacles are `CircleObstacle(x, y, r)` values. Each link is covered by three
circles of radius one sixth of the link's length. A pose counts as colliding
when any of these circles comes within 10 units of an obstacle.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Command line

```
armplanner
```

The default arm has link lengths 110, 145 and 180 and a starting first joint
of 1 rad. It traces a circle of radius 80 centred at (300, 0). The command
plans a trajectory, prints the total length of the path in joint space, and
plays the motion in a pygame window until you close the window.

Options:

- `--planner {optimization,newton,brute-force}` selects the planner. The
  default is `optimization`.
- `--step STEP` sets the sampling step on the circle in radians. The default is
  0.1, and the value must be positive.
- `--obstacles` adds two obstacles, at (400, -100) with radius 40 and at
  (60, 120) with radius 60, and turns on obstacle avoidance.
- `--no-display` plans only and opens no window.
- `--sinusoidal` plays ten seconds of a sinusoidal demonstration motion instead
  of the planned trajectory.
- `-v`, `--verbose` logs progress, including each optimization iteration.

The exit status is 0 on success and 1 when no trajectory is found. It is 2 when
the step is not positive, and argparse's own status for bad options.

## Library use

```python
from armplanner.geometry import CircleObstacle, total_q_distance
from armplanner.planner import Planner
from armplanner.optimization import plan_optimization

planner = Planner(
    110, 145, 180, 300, 0, 80,
    [CircleObstacle(400, -100, 40)],
    q1=1.0, avoid_obstacles=True,
)
points = planner.points_sampler(0.1)
trajectory = plan_optimization(planner, points)
print(total_q_distance(trajectory))
```

Each trajectory is a list of `(q1, q2, q3)` tuples in radians.

Other parts of the package:

- `Planner.kinematics(q)` returns the end-effector position, and
  `Planner.jacobian(q)` returns its 2×3 Jacobian.
- `Planner.inverse_kinematics(target, q_initial)` runs Newton–Raphson with
  least-squares steps from `q_initial`, which defaults to all zeros.
- `Planner.check_collision(q)` tests a pose against the obstacles, and
  `Planner.collision_circles(q)` yields the nine circles it uses.
- `armplanner.geometry` provides `normalize_angle`,
  `compute_circle_intersection` and `total_q_distance`.
  `compute_circle_intersection` raises `ValueError` for concentric circles and
  for circles that do not meet.
- `armplanner.visualization.Visualization` opens a 1200×800 window and animates
  a trajectory with `visualize(trajectory)`. Pure helpers are available without
  a window: `joint_positions`, `collision_circles`, `info_lines` and
  `sinusoidal_trajectory`.

## Limitations

- No sampling-based planner is provided. Obstacles are avoided only by the
  brute-force planner and, for the first link only, by the optimization
  planner when `avoid_obstacles` is set.
- The display needs a screen that pygame can open. Text is drawn with
  pygame's default font.

## Tests

```
pytest
```