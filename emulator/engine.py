from dataclasses import dataclass

from emulator.codec import Alphabet, Direction, state_label
from emulator.tape import Tape

DEFAULT_STEP_LIMIT = 1_000_000


@dataclass(frozen=True)
class Configuration:
    state: int
    tape: Tape
    step_count: int = 0

    # Tape is mutable and unhashable
    __hash__ = None

    @property
    def state_label(self):
        return state_label(self.state)


@dataclass(frozen=True)
class RunResult:
    configuration: Configuration
    steps_executed: int
    limit_reached: bool

    __hash__ = None


@dataclass(frozen=True)
class Snapshot:
    state: str
    window: tuple
    head_position: int
    radius: int
    step_count: int
    halted: bool
    accepted: bool

    @property
    def configuration(self):
        """Instantaneous description: cells left of the head, the state, then the scanned cell onwards."""
        return "".join(self.window[:self.radius]) + self.state + "".join(self.window[self.radius:])

    def as_dict(self):
        return {
            "state": self.state,
            "configuration": self.configuration,
            "window": "".join(self.window),
            "head_position": self.head_position,
            "step_count": self.step_count,
            "halted": self.halted,
            "accepted": self.accepted,
        }


class Engine:
    def __init__(self, machine, alphabet=None):
        self.machine = machine
        self.alphabet = alphabet if alphabet is not None else Alphabet()

    def initial_configuration(self, text):
        tape = Tape.from_input(text, self.alphabet, self.machine.blank_symbol)
        return Configuration(self.machine.start_state, tape, 0)

    def is_halted(self, config):
        return self.machine.transition(config.state, config.tape.read()) is None

    def is_accepting(self, config):
        """Acceptance depends on the current state only, not on whether the machine can still move."""
        return self.machine.is_accept_state(config.state)

    def step(self, config):
        """Return the successor configuration, or None if the machine halts. config is left untouched."""
        t = self.machine.transition(config.state, config.tape.read())
        if t is None:
            return None

        tape = config.tape.clone()
        tape.write(t.write_symbol)
        if t.direction is Direction.LEFT:
            tape.move_left()
        else:
            tape.move_right()
        return Configuration(t.to_state, tape, config.step_count + 1)

    def iter_configurations(self, config, step_limit=DEFAULT_STEP_LIMIT):
        """Yield successors of config until the machine halts or step_limit steps were taken."""
        for _ in range(step_limit):
            config = self.step(config)
            if config is None:
                return
            yield config

    def run(self, config, step_limit=DEFAULT_STEP_LIMIT, on_step=None):
        steps = 0
        for next_config in self.iter_configurations(config, step_limit):
            config = next_config
            steps += 1
            if on_step is not None:
                on_step(config)
        limit_reached = steps >= step_limit and not self.is_halted(config)
        return RunResult(config, steps, limit_reached)

    def snapshot(self, config, radius=15):
        window = config.tape.window(radius, radius)
        halted = self.is_halted(config)
        return Snapshot(
            state=config.state_label,
            window=tuple(self.alphabet.char_for(s) for s in window),
            head_position=config.tape.head,
            radius=radius,
            step_count=config.step_count,
            halted=halted,
            accepted=halted and self.is_accepting(config),
        )
