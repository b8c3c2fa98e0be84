from dataclasses import dataclass

from errors import ArnError


@dataclass(frozen=True)
class TaskArn:
    account: str
    task_id: str
    region: str


@dataclass(frozen=True)
class RoleArn:
    account: str
    domain: str
    service: str


def _split(arn: str, service: str) -> list:
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise ArnError(f"invalid arn: {arn!r}")
    if parts[2] != service:
        raise ArnError(f"not an {service} arn: {arn!r}")
    return parts


def parse_task_arn(task_arn: str) -> TaskArn:
    """Parse an ECS task ARN.

    Both the short form ``arn:aws:ecs:<region>:<account>:task/<task-id>`` and
    the cluster form ``arn:aws:ecs:<region>:<account>:task/<cluster>/<task-id>``
    are accepted.
    """
    parts = _split(task_arn, "ecs")
    comps = parts[5].split("/")
    if comps[0] != "task":
        raise ArnError(f"not a task resource: {task_arn!r}")
    if len(comps) not in (2, 3) or not comps[-1]:
        raise ArnError(f"unexpected task resource: {parts[5]!r}")
    return TaskArn(account=parts[4], task_id=comps[-1], region=parts[3])


def split_service_name(role_name: str, suffix: str = "") -> tuple:
    if suffix:
        if not role_name.endswith(suffix):
            raise ArnError(f"role name {role_name!r} does not end with {suffix!r}")
        role_name = role_name[: -len(suffix)]
    domain, sep, service = role_name.rpartition(".")
    if not sep or not domain or not service:
        raise ArnError(f"role name {role_name!r} is not in <domain>.<service> form")
    return domain, service


def parse_role_arn(arn: str, prefix: str, suffix: str = "") -> RoleArn:
    """Parse ``arn:aws:iam::<account>:<prefix><domain>.<service><suffix>``.

    ``prefix`` is ``role/`` for IAM roles and ``instance-profile/`` for
    instance profiles.
    """
    parts = _split(arn, "iam")
    resource = parts[5]
    if not resource.startswith(prefix):
        raise ArnError(f"arn resource {resource!r} does not start with {prefix!r}")
    if not parts[4]:
        raise ArnError(f"arn has no account: {arn!r}")
    domain, service = split_service_name(resource[len(prefix):], suffix)
    return RoleArn(account=parts[4], domain=domain, service=service)


def parse_assumed_role_arn(arn: str, suffix: str = "") -> RoleArn:
    # arn:aws:sts::<account>:assumed-role/<role>/<session>
    parts = _split(arn, "sts")
    comps = parts[5].split("/")
    if len(comps) != 3 or comps[0] != "assumed-role":
        raise ArnError(f"not an assumed role arn: {arn!r}")
    if not parts[4]:
        raise ArnError(f"arn has no account: {arn!r}")
    domain, service = split_service_name(comps[1], suffix)
    return RoleArn(account=parts[4], domain=domain, service=service)
