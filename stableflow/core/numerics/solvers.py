from numba import njit
from .grid import index
from .boundary import enforce_boundary

# Fixed relaxation sweep count; no convergence check
DEFAULT_ITERATIONS = 20

@njit
def diffuse(bound, x, x_prev, diffusivity, dt, size, iterations=DEFAULT_ITERATIONS):
    """
    Implicit diffusion solved by Gauss-Seidel relaxation.

    Solves (1 + 4a) x - a * (sum of the four neighbours of x) = x_prev with
    a = dt * diffusivity * size ** 2. Sweeps run row-major with i fastest and
    update x in place, so each update already sees the neighbours refreshed
    earlier in the same sweep. The padding ring is refilled after every sweep.

    Args:
        bound: BoundaryMode value of the field
        x: Output field, also the initial guess
        x_prev: Field being diffused, read only
        diffusivity: Diffusion coefficient
        dt: Time delta
        size: Interior grid resolution
        iterations: Number of relaxation sweeps
    """
    size_pad = size + 2
    a = dt * diffusivity * size ** 2
    s = 1.0 / (1.0 + 4.0 * a)

    for _ in range(iterations):
        for j in range(1, size + 1):
            for i in range(1, size + 1):
                x[index(i, j, size_pad)] = s * (
                    x_prev[index(i, j, size_pad)]
                    + a * (
                        x[index(i - 1, j, size_pad)] + x[index(i + 1, j, size_pad)] +
                        x[index(i, j - 1, size_pad)] + x[index(i, j + 1, size_pad)]
                    )
                )

        enforce_boundary(bound, x, size)

@njit
def compute_divergence(vx, vy, div, size):
    """Central-difference divergence of (vx, vy) into the interior of div"""
    size_pad = size + 2
    h = 1.0 / size

    for j in range(1, size + 1):
        for i in range(1, size + 1):
            div[index(i, j, size_pad)] = (
                (vx[index(i + 1, j, size_pad)] - vx[index(i - 1, j, size_pad)]) +
                (vy[index(i, j + 1, size_pad)] - vy[index(i, j - 1, size_pad)])
            ) * (0.5 / h)

@njit
def project(vx, vy, p, div, size, iterations=DEFAULT_ITERATIONS):
    """
    Remove the gradient component of the velocity field.

    Computes the divergence of (vx, vy), relaxes the Poisson equation
    lap(p) = div with Gauss-Seidel, then subtracts grad(p) from the velocity.
    p and div are scratch; p carries over from the previous call as the
    initial guess.

    Args:
        vx: x-velocity, updated in place
        vy: y-velocity, updated in place
        p: Potential scratch buffer
        div: Divergence scratch buffer
        size: Interior grid resolution
        iterations: Number of relaxation sweeps
    """
    size_pad = size + 2
    h = 1.0 / size

    compute_divergence(vx, vy, div, size)
    enforce_boundary(0, div, size)
    enforce_boundary(0, p, size)

    for _ in range(iterations):
        for j in range(1, size + 1):
            for i in range(1, size + 1):
                p[index(i, j, size_pad)] = -0.25 * (
                    h ** 2 * div[index(i, j, size_pad)]
                    - (
                        p[index(i - 1, j, size_pad)] +
                        p[index(i + 1, j, size_pad)] +
                        p[index(i, j - 1, size_pad)] +
                        p[index(i, j + 1, size_pad)]
                    )
                )

        enforce_boundary(0, p, size)

    for j in range(1, size + 1):
        for i in range(1, size + 1):
            vx[index(i, j, size_pad)] -= (0.5 / h) * (
                p[index(i + 1, j, size_pad)] - p[index(i - 1, j, size_pad)])
            vy[index(i, j, size_pad)] -= (0.5 / h) * (
                p[index(i, j + 1, size_pad)] - p[index(i, j - 1, size_pad)])

    enforce_boundary(1, vx, size)
    enforce_boundary(2, vy, size)
