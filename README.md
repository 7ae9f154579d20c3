# ngineer

Tools for steady-state engineering calculations:

- **Nodal analysis** – build a network of nodes and elements (resistors,
  voltage and current sources, thermal conductors, convection interfaces,
  temperature deltas and heat fluxes) and solve for every nodal potential
  with a multivariate Newton–Raphson solver.
- **Equation preprocessing** – strip comments, pull out `guess ... for ...`
  and `keep ... on [a, b]` declarations, and rewrite `if / else / end`
  blocks in plain-text equation systems.

The package has no runtime dependencies beyond the standard library.

## Installation

```
pip install ngineer
```

## Solving a model from the command line

A model is a JSON document describing the study type, the number of nodes,
any pre-configured nodes and the list of elements:

```json
{
  "model_type": "dc_circuit",
  "nodes": 4,
  "configuration": {
    "0": {"potential": [0.0], "is_locked": true, "metadata": null}
  },
  "elements": [
    {"element_type": "voltage_source", "input": 0, "output": 1, "gain": [3.0]},
    {"element_type": "resistor",       "input": 1, "output": 2, "gain": [2.0]},
    {"element_type": "resistor",       "input": 2, "output": 3, "gain": [1.0]},
    {"element_type": "resistor",       "input": 3, "output": 0, "gain": [1.0]}
  ]
}
```

Solve it with:

```
ngineer-nodal circuit.json
```

The solution is written next to the input as `circuit.soln.json`, holding
the potential of every node and the flux through every element (keyed as
`<element_type>.<index>`).

Options:

| Option                   | Meaning                                  | Default  |
|--------------------------|------------------------------------------|----------|
| `--precision`, `-p`      | convergence margin for the solver        | `0.0001` |
| `--iterations`, `-i`     | maximum number of solver iterations      | `100`    |

On any failure (missing file, malformed JSON, a model that cannot be
solved) a message prefixed with `[neapolitan].....ERR:` is printed and the
command exits with status 1.

## Building a model in Python

```python
from ngineer.study import NodalAnalysisStudyBuilder

builder = NodalAnalysisStudyBuilder("dc_circuit")
builder.add_nodes(4)
builder.configure_node(0, [0.0], True, None)        # ground node
builder.add_element("voltage_source", 0, 1, [3.0])
builder.add_element("resistor", 1, 2, [2.0])
builder.add_element("resistor", 2, 3, [1.0])
builder.add_element("resistor", 3, 0, [1.0])

result = builder.run_study(0.0001, 100)
print(result.to_json())
```

Two study types come ready to use (see `default_study_builder_config()`):

- `dc_circuit`: `resistor` (gain = resistance), `voltage_source`
  (gain = voltage), `current_source` (gain = current).
- `heat_transfer`: `conductor` (gain = `[k/L]` or `[L, k]`),
  `convection_interface` (gain = `[h]`), `temperature_delta`,
  `heat_flux`.

Referring to a node that does not exist, or an unknown study type, raises
`NodalAnalysisModellingError`. A voltage source or temperature delta placed
between two nodes that are both already locked raises
`ElementCreationError`.

### Custom element types

A `NodalAnalysisStudyConfigurator` maps element names to constructor
functions. A constructor takes the input node, the output node and the list
of gain values, and returns a `GenericElement`. The flux formulas
`normal_flux`, `observe_flux` and `constant_flux` in `ngineer.nodal` cover
the common cases. Registering the same name twice raises
`NodalAnalysisConfigurationError`.

### Saving and loading models

`NodalAnalysisModel.to_json()` / `NodalAnalysisModel.from_json(text)` and
`to_dict()` / `from_dict(data)` convert a model to and from the JSON layout
shown above; `NodalAnalysisStudyBuilder.from_model_with_default_config(model)`
turns a loaded model back into a builder ready to run.

## Preprocessing equation text

```python
from ngineer.parsing import comments, conditionals, domains, guess_values

text = """
keep x on [0, 100]
guess 3 for y
x + y = 9   // the sum
"""

text = comments(text)
text, bounds = domains(text)       # {"x": [0.0, 100.0]}
text, guesses = guess_values(text) # {"y": 3.0}
```

`conditionals` rewrites blocks such as

```
if a < b:
    b - a
else:
    a - b
end
```

into a single function-call equation, `if(a,4.0,b,b-a,a-b) = 0`, and
handles nested blocks. An unsupported comparison operator such as `=<`
raises `ConditionFormatError`.