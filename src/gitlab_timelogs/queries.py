"""GraphQL query templates for GitLab API."""

# Issues of a project with every timelog logged against them.
# GitLab's REST API does not expose who logged what on an issue, only GraphQL does.
PROJECT_TIMELOGS_QUERY = """
query ProjectTimelogs($fullPath: ID!) {
  project(fullPath: $fullPath) {
    issues {
      nodes {
        iid
        title
        timelogs {
          nodes {
            timeSpent
            spentAt
            user {
              username
            }
          }
        }
      }
    }
  }
}
"""
