"""rxvmgen — ReactiveUI ViewModel skeleton generator."""

__version__ = "0.3.0"
