"""Resource template providers. Each subpackage exposes a `resources` package."""
