import pytest

from arn import parse_assumed_role_arn, parse_role_arn, parse_task_arn
from errors import ArnError


def test_parse_task_arn_with_cluster():
    arn = parse_task_arn("arn:aws:ecs:us-west-2:1234:task/my-cluster/abcd1234")
    assert arn.task_id == "abcd1234"
    assert arn.account == "1234"
    assert arn.region == "us-west-2"


def test_parse_task_arn_short_form():
    assert parse_task_arn("arn:aws:ecs:us-east-1:1234:task/9781c248").task_id == "9781c248"


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-an-arn",
        "arn:aws:ec2:us-west-2:1234:task/c/abcd",
        "arn:aws:ecs:us-west-2:1234:service/c/abcd",
        "arn:aws:ecs:us-west-2:1234:task/a/b/c",
        "arn:aws:ecs:us-west-2:1234:task",
    ],
)
def test_parse_task_arn_rejects_malformed(value):
    with pytest.raises(ArnError):
        parse_task_arn(value)


def test_parse_role_arn():
    role = parse_role_arn("arn:aws:iam::123456789012:role/sports.api", "role/")
    assert (role.account, role.domain, role.service) == ("123456789012", "sports", "api")


def test_parse_instance_profile_arn_strips_suffix():
    role = parse_role_arn(
        "arn:aws:iam::123456789012:instance-profile/media.prod.backend-service", "instance-profile/", "-service"
    )
    assert (role.domain, role.service) == ("media.prod", "backend")


@pytest.mark.parametrize(
    "value,prefix,suffix",
    [
        ("arn:aws:iam::123456789012:role/sports.api", "role/", "-service"),
        ("arn:aws:iam::123456789012:role/noservice", "role/", ""),
        ("arn:aws:iam::123456789012:user/sports.api", "role/", ""),
        ("arn:aws:iam:::role/sports.api", "role/", ""),
        ("arn:aws:sts::123456789012:role/sports.api", "role/", ""),
    ],
)
def test_parse_role_arn_rejects(value, prefix, suffix):
    with pytest.raises(ArnError):
        parse_role_arn(value, prefix, suffix)


def test_parse_assumed_role_arn():
    role = parse_assumed_role_arn(
        "arn:aws:sts::123456789012:assumed-role/sports.api-service/i-0abcd1234", "-service"
    )
    assert (role.account, role.domain, role.service) == ("123456789012", "sports", "api")


def test_parse_assumed_role_arn_rejects_iam_user():
    with pytest.raises(ArnError):
        parse_assumed_role_arn("arn:aws:iam::123456789012:user/bob", "-service")
