"""GraphQL documents sent to the GitHub API."""

from approve_label.utils.constants import MAX_REPOSITORY_LABELS, MAX_TEAM_MEMBERS

TEAM_MEMBERS_QUERY = f"""
query($teamSlug: String!, $owner: String!) {{
  organization(login: $owner) {{
    team(slug: $teamSlug) {{
      members(membership: ALL, first: {MAX_TEAM_MEMBERS}) {{
        edges {{
          node {{
            login
            email
            name
          }}
        }}
      }}
    }}
  }}
}}
"""

REPOSITORY_ID_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}
"""

PULL_REQUEST_ID_QUERY = """
query($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      id
    }
  }
}
"""

REPOSITORY_LABELS_QUERY = f"""
query($repositoryId: ID!) {{
  node(id: $repositoryId) {{
    ... on Repository {{
      labels(first: {MAX_REPOSITORY_LABELS}) {{
        nodes {{
          id
          name
          color
          description
        }}
      }}
    }}
  }}
}}
"""

CREATE_LABEL_MUTATION = """
mutation($repositoryId: ID!, $name: String!, $color: String!, $description: String) {
  createLabel(input: {repositoryId: $repositoryId, name: $name, color: $color, description: $description}) {
    label {
      id
      name
      color
      description
    }
  }
}
"""

ADD_LABELS_MUTATION = """
mutation($labelableId: ID!, $labelIds: [ID!]!) {
  addLabelsToLabelable(input: {labelableId: $labelableId, labelIds: $labelIds}) {
    clientMutationId
  }
}
"""

REMOVE_LABELS_MUTATION = """
mutation($labelableId: ID!, $labelIds: [ID!]!) {
  removeLabelsFromLabelable(input: {labelableId: $labelableId, labelIds: $labelIds}) {
    clientMutationId
  }
}
"""

CLEAR_LABELS_MUTATION = """
mutation($labelableId: ID!) {
  clearLabelsFromLabelable(input: {labelableId: $labelableId}) {
    clientMutationId
  }
}
"""

ADD_COMMENT_MUTATION = """
mutation($subjectId: ID!, $body: String!) {
  addComment(input: {subjectId: $subjectId, body: $body}) {
    commentEdge {
      node {
        createdAt
        body
      }
    }
  }
}
"""
