import asyncio

from orgusers.config import MembershipConfig
from orgusers.data import InMemoryDocumentStore
from orgusers.lifecycle import MyUsersController

####################
# #### Store #######
####################

print("\n\n##### Store #######\n\n")

config = MembershipConfig()
store = InMemoryDocumentStore(link_map=config.link_map())

store.seed(config.role.acronym, [
    {'id': 'r1', 'name': 'admin', 'label': 'Admin'},
    {'id': 'r2', 'name': 'buyer', 'label': 'Buyer'},
])
store.seed(config.persona.acronym, [
    {'id': 'p1', 'email': 'jane@example.com', 'businessOrganizationId': 'org-1'},
    {'id': 'p2', 'email': 'john@example.com', 'businessOrganizationId': 'org-1'},
    {'id': 'p3', 'email': 'rosa@example.com', 'businessOrganizationId': ''},
])
store.seed(config.assignment.acronym, [
    {'id': 'a1', 'personaId': 'p1', 'businessOrganizationId': 'org-1', 'roleId': 'r1', 'status': 'APPROVED'},
    {'id': 'a2', 'personaId': 'p2', 'businessOrganizationId': 'org-1', 'roleId': 'r2', 'status': 'APPROVED'},
    {'id': 'a3', 'personaId': 'p3', 'businessOrganizationId': 'org-1', 'roleId': 'r2', 'status': 'DECLINED'},
])


#######################
# #### Controller #####
#######################

async def main():
    # jane (p1) manages the organization
    controller = MyUsersController(store, config, 'org-1', 'p1', show_toast=print)
    await controller.refresh()

    print("\n\n##### Rows #######\n\n")
    for row in controller.rows:
        print(row)

    print("\n\n##### Re-invite rosa #######\n\n")
    await controller.re_invite('a3')
    print(store.get(config.assignment.acronym, 'a3'))

    print("\n\n##### Delete john #######\n\n")
    controller.request_delete('a2')
    result = await controller.confirm_delete()
    print("cascaded", result.cascaded)
    print("persona", store.get(config.persona.acronym, 'p2'))
    print("remaining", [a.id for a in controller.assignments])


asyncio.run(main())
