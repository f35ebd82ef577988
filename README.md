# oceanapi

A Python client for the DigitalOcean v2 API, built on `requests`. It covers
droplets, droplet actions, image actions, firewalls, floating IPs and
floating IP actions. It also turns API errors into exceptions, records the
rate-limit headers of each response and adds pagination parameters to list
requests.

## Installation

```
pip install oceanapi
```

To run the tests, install the test extra:

```
pip install "oceanapi[test]"
pytest
```

## Creating a client

`oceanapi.cloud.new_from_token` returns a `CloudClient` whose session sends
the token as `Authorization: Bearer <token>` on every request. Surrounding
whitespace and single quotes are removed from the token first.

```python
from oceanapi.cloud import new_from_token

client = new_from_token("token")
```

`new(session, *options)` builds a client from an optional
`requests.Session` and applies each option in turn. `new_client(session)`
does the same without options.

```python
from oceanapi.cloud import new
from oceanapi.client import set_base_url, set_user_agent, set_request_headers

client = new(
    None,
    set_base_url("http://localhost:8080/"),
    set_user_agent("my-tool/1.0"),
    set_request_headers({"X-Test-Header": "value"}),
)
```

- `set_base_url` changes the URL that request paths are resolved against
  (by default `https://api.digitalocean.com/`).
- `set_user_agent` puts your string in front of the library's own user agent.
- `set_request_headers` adds headers sent with every request.

## Working with resources

A `CloudClient` carries one service per group of endpoints:
`client.droplets`, `client.droplet_actions`, `client.image_actions`,
`client.firewalls`, `client.floating_ips` and `client.floating_ip_actions`.
The services can also be built directly on any `oceanapi.client.Client`,
e.g. `DropletsService(client)`.

Every call that returns data gives a pair: the result and the
`oceanapi.client.Response`. Calls that return nothing give just the
`Response`.

```python
from oceanapi.client import ListOptions
from oceanapi.droplets import DropletCreateRequest, DropletCreateImage

droplets, response = client.droplets.list(ListOptions(page=2))
print(response.meta, response.links)

droplet, response = client.droplets.create(
    DropletCreateRequest(
        name="web-1",
        region="nyc3",
        size="s-1vcpu-1gb",
        image=DropletCreateImage(slug="ubuntu-20-04-x64"),
        tags=["web"],
    )
)

action, _ = client.droplet_actions.reboot(droplet.id)
print(action["status"])
actions, _ = client.droplet_actions.snapshot_by_tag("web", "nightly")
```

What each service returns:

- `DropletsService` gives `Droplet` and `Kernel` objects; snapshots, backups
  and actions of a droplet come back as the mappings the API sent. A
  `Droplet` keeps its region, image and size as mappings too.
- `DropletActionsService`, `ImageActionsService` and
  `FloatingIPActionsService` return actions as mappings.
- `FirewallsService` gives `Firewall` objects and takes `FirewallRequest`
  and `FirewallRulesRequest` values built from `InboundRule`,
  `OutboundRule`, `Sources` and `Destinations`. `add_droplets`,
  `remove_droplets`, `add_tags` and `remove_tags` take the ids or tags as
  extra arguments.
- `FloatingIPsService` gives `FloatingIP` objects and takes a
  `FloatingIPCreateRequest`.

List calls that are paginated copy the body's `links` and `meta` onto the
`Response` unchanged, as mappings.

A `Droplet` reports its addresses with `public_ipv4()`, `private_ipv4()` and
`public_ipv6()`, which return `""` when no matching address exists and raise
`NoNetworksError` when the droplet has no network information.

## Errors and rate limits

- An invalid argument, such as a droplet id below 1 or an empty tag, raises
  `oceanapi.errors.ArgError` (a `ValueError`) before any request is sent.
- A response outside the 2xx range raises `oceanapi.client.ErrorResponse`,
  with the API's `message` and `request_id`. The request id is taken from the
  `x-request-id` header when the body does not contain one.

After each request the client records the rate-limit headers.
`client.get_rate()` returns them as a `Rate` with `limit`, `remaining` and
`reset` (a UTC `datetime`, or `None`).

`client.on_request_completed(callback)` registers a function called with the
request and the `requests.Response` after every request.

## What it does not cover

Only the resources listed above are available. There are no services for
other parts of the API, such as accounts, domains, image listing, SSH keys,
regions, sizes, volumes, load balancers, Kubernetes or databases, and the
package has no command-line tool. It does not follow pagination links by
itself; request further pages with `ListOptions`.