from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    # IRR solver (rates are monthly except the seed, which is annual)
    irr_seed_rate: float = 0.10
    irr_tolerance: float = 1e-5
    irr_step_tolerance: float = 1e-12
    irr_max_iterations: int = 100
    irr_min_rate: float = -0.99
    irr_max_rate: float = 10.0
    irr_bracket_points: int = 2000

    # Monte Carlo
    monte_carlo_iterations: int = 1000
    monte_carlo_uncertainty: float = 0.20

    # Experiment design
    default_power: float = 0.80

    class Config:
        env_prefix = "DECISION_ENGINE_"
        env_file = ".env"
