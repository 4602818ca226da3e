"""
Resolving node inputs across while-loop iterations.

The executor writes each iteration's outputs under a scope-qualified name;
the same node definition then reads the tensor of the current iteration.
"""

import torch

from opresolve import ExecutionContext, Node, ParamDescriptor, get_param_value, get_tensor


def main():
    ctx = ExecutionContext({"bias": [torch.tensor([0.5])]})
    add = Node(
        name="body/add",
        op="Add",
        input_names=["body/acc", "bias"],
        params={"a": ParamDescriptor.tensor(0), "b": ParamDescriptor.tensor(1)},
    )
    tensor_map = {"body/acc": [torch.tensor([0.0])]}

    ctx.enter_frame("while")
    for step in range(3):
        a = get_param_value("a", add, tensor_map, ctx)
        b = get_param_value("b", add, tensor_map, ctx)
        out = a + b
        tensor_map[f"body/add-{ctx.current_context_id}"] = [out]
        print(f"iteration {step} ({ctx.current_context_id!r}): {out.item():.2f}")

        ctx.next_iteration()
        tensor_map[f"body/acc-{ctx.current_context_id}"] = [out]
    ctx.exit_frame()

    print("outer acc:", get_tensor("body/acc", tensor_map, ctx))


if __name__ == "__main__":
    main()
