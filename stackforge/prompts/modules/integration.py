"""Cross-cutting integration modules: containerization, CORS, TypeScript, auth."""

from __future__ import annotations

import textwrap
from collections.abc import Sequence

from stackforge.prompts.modules.backend import BackendModule
from stackforge.prompts.modules.base import ModuleCategory, Technology, TechnologyModule


_NGINX_CONF = textwrap.dedent("""\
    **nginx.conf:**
    ```nginx
    server {
        listen 80;
        server_name localhost;
        root /usr/share/nginx/html;
        index index.html;

        location / {
            try_files $uri $uri/ /index.html;
        }
    }
    ```
    """)


def _frontend_dockerfile(build_output_dir: str) -> str:
    return textwrap.dedent(f"""\
        ### Frontend Dockerfile (multi-stage):
        ```dockerfile
        FROM node:20-alpine AS build
        WORKDIR /app
        COPY package*.json ./
        RUN npm ci
        COPY . .
        RUN npm run build

        FROM nginx:alpine
        COPY --from=build /app/{build_output_dir} /usr/share/nginx/html
        COPY nginx.conf /etc/nginx/conf.d/default.conf
        EXPOSE 80
        CMD ["nginx", "-g", "daemon off;"]
        ```
        """)


class DockerModule(TechnologyModule):
    """Containerization. Included in every generated project."""

    key = Technology.DOCKER
    title = "Docker"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Docker Files:
            - Dockerfile in every service directory
            - docker-compose.yml at the project root
            - .dockerignore next to every Dockerfile (node_modules, vendor, .env)
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Docker Validation:
            - docker-compose.yml present at the root
            - Every service in docker-compose.yml has a build context with a Dockerfile
            - Exposed ports match the ports the services listen on
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Docker - Errors to avoid:
            - **COPY of node_modules into the image** -> huge, broken images
            - **Wrong build output path in the nginx stage** -> empty site
            - **Backend reachable only on 127.0.0.1** -> bind to 0.0.0.0
            """)

    def compose_configuration(self, modules: Sequence[TechnologyModule]) -> str:
        """Containerization section for the whole module set.

        The frontend image copies from the frontend's build directory, the
        backend image comes from the backend module, and a compose file wires
        both services together when both are present.
        """
        frontend = next((m for m in modules if m.category is ModuleCategory.FRONTEND), None)
        backend = next((m for m in modules if isinstance(m, BackendModule)), None)

        sections = ["## CONTAINERIZATION (MANDATORY)"]
        if frontend is not None:
            sections.append(_frontend_dockerfile(frontend.build_output_dir))
            sections.append(_NGINX_CONF)
        if backend is not None:
            dockerfile = backend.dockerfile()
            if dockerfile:
                sections.append(dockerfile)

        sections.append(self._compose_file(frontend, backend))
        return "\n".join(section.strip("\n") for section in sections) + "\n"

    @staticmethod
    def _compose_file(frontend: TechnologyModule | None, backend: BackendModule | None) -> str:
        fullstack = frontend is not None and backend is not None
        lines = ["**docker-compose.yml:**", "```yaml", "services:"]
        if frontend is not None:
            context = "./frontend" if fullstack else "."
            lines.extend([
                "  frontend:",
                f"    build: {context}",
                "    ports:",
                '      - "8080:80"',
            ])
            if fullstack:
                lines.extend(["    depends_on:", "      - backend"])
        if backend is not None:
            context = "./backend" if fullstack else "."
            lines.extend([
                "  backend:",
                f"    build: {context}",
                "    ports:",
                f'      - "{backend.port}:{backend.port}"',
                "    healthcheck:",
                f'      test: ["CMD", "wget", "-qO-", "http://localhost:{backend.port}{backend.health_path}"]',
                "      interval: 30s",
                "      retries: 3",
            ])
        lines.append("```")
        return "\n".join(lines) + "\n"


class CORSModule(TechnologyModule):
    key = Technology.CORS
    title = "CORS"

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### CORS Configuration:
            - The backend allows the frontend origin (http://localhost:8080 in Docker,
              http://localhost:5173 for the Vite dev server)
            - Allowed origins are read from an environment variable, never hard-coded `*`
              when credentials are sent
            - The frontend reads the API base URL from its own environment file
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### CORS - Errors to avoid:
            - **Wildcard origin with credentials** -> browsers reject the response
            - **Preflight (OPTIONS) not handled** -> POST/PUT requests fail
            """)


class TypeScriptModule(TechnologyModule):
    key = Technology.TYPESCRIPT
    title = "TypeScript"

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### TypeScript Dependencies:
            ```bash
            npm install -D typescript @types/node
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### TypeScript Configuration:
            - tsconfig.json with "strict": true
            - Source files use .ts / .tsx (or <script setup lang="ts"> for Vue)
            - Build tool config files use the .ts extension (vite.config.ts)
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### TypeScript Validation:
            - tsconfig.json present
            - typescript in devDependencies
            """)


class AuthModule(TechnologyModule):
    key = Technology.AUTH
    title = "Authentication"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Authentication:
            - Backend: login, logout and current-user endpoints
            - Frontend: login page, auth store, route guard for protected pages
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Authentication Configuration:
            - Token secret read from the environment, documented in .env.example
            - Passwords hashed, never stored or logged in plain text
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Authentication - Errors to avoid:
            - **Secret committed in source** -> use .env.example with a placeholder
            - **Token stored without expiry** -> sessions never end
            """)
