# openapimodel

A typed Python model of OpenAPI 3.0 documents. Load a specification from
YAML or JSON, walk its paths and operations, resolve `$ref` references,
build documents in code, merge two documents and write them back out.

## Installation

```
pip install openapimodel
```

## Loading and inspecting a document

```python
from openapimodel.openapi import OpenAPI

with open("petstore.yaml") as fh:
    api = OpenAPI.from_yaml(fh.read())

print(api.info.title, api.info.version)

for path, method, operation, item in api.operations():
    print(method.upper(), path, operation.operation_id)
```

`OpenAPI.from_json` reads JSON text. `to_yaml` and `to_json` write a
document back out. `from_dict` and `to_dict` work with plain Python data;
every model class (`Info`, `Server`, `Schema`, `Parameter`, `Operation`,
`PathItem`, `Components` and the rest) has the same pair.

`api.get_operation("listPets")` returns the operation with that
`operationId` together with its `PathItem`, or `None`. The reusable
objects of `components` are also reachable directly on the document, for
example `api.schemas` or `api.parameters`.

Path items given as `$ref` are skipped by `operations()`. Keys of the
paths object that do not start with `/`, and keys of a responses object
that are neither `default`, a status code, a status range nor an `x-`
extension, are dropped on reading. Specification extensions (`x-` keys)
are kept in each object's `extensions` dict.

## Resolving references

Schema references are followed through `components.schemas`, nested
references and `#/components/schemas/A/properties/b` pointers included.
A reference cycle raises `CircularReferenceError`.

```python
from openapimodel.reference import schema_ref, resolve_schema

user_id = resolve_schema(schema_ref("UserId"), api)
```

`resolve_parameter`, `resolve_response` and `resolve_request_body` follow
one level of reference into the matching component section and raise
`ResolveError` when a reference cannot be followed.

## Building documents

```python
from openapimodel.openapi import OpenAPI
from openapimodel.operation import Operation
from openapimodel.parameter import Parameter
from openapimodel.schema import Schema

api = OpenAPI()
api.info.title = "Example"
api.info.version = "1.0.0"

op = Operation(operation_id="getUser")
op.parameters.append(Parameter.path("id", Schema.new_string()))
op.add_response_success(Schema.new_object(), "application/json")
api.paths.insert_operation("/users/{id}", "get", op)

print(api.to_yaml())
```

`Schema` has constructors for the common shapes (`new_string`,
`new_integer`, `new_array`, `new_map`, `new_one_of`, `new_all_of`, ...)
and helpers for object schemas such as `add_required`, `remove_required`
and `properties_iter`. A new document declares OpenAPI version `3.0.3`.

## Merging

`a.merge(b)` returns a new document holding everything from both, keeping
the entries of `a` where the two clash. `a.merge_overwrite(b)` keeps the
entries of `b` instead. Path items given as references, parameter
references, and shared paths whose parameter lists differ raise
`MergeError`.

## Status codes

Response keys are `openapimodel.util.StatusCode` values: an exact code
such as `404` or a range such as `4XX`. `StatusCode.parse` accepts
integers and three-character strings (`"200"`, `"2XX"`, `"4xx"`) and
raises `InvalidStatusCode` for anything else.

## What it does not do

- Security schemes in `components.securitySchemes` are kept as plain
  dictionaries, not typed objects.
- Swagger 2.0 documents cannot be read or upgraded; only OpenAPI 3.0 is
  modelled.
- Documents are checked only for the shape and types of their fields;
  there is no full validation against the specification.
- There is no command-line tool; the package is a library.