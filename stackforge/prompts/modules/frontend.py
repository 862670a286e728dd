"""Frontend technology modules."""

from __future__ import annotations

import textwrap

from stackforge.prompts.modules.base import ModuleCategory, Technology, TechnologyModule


class ReactBasicModule(TechnologyModule):
    key = Technology.REACT_BASIC
    title = "React (Create React App)"
    category = ModuleCategory.FRONTEND
    build_output_dir = "build"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### React (Create React App) Structure:
            ```
            my-app/
            ├── public/
            │   ├── index.html          # HTML template with div#root
            │   ├── favicon.ico
            │   └── manifest.json
            ├── src/
            │   ├── index.js            # Entry point, renders <App />
            │   ├── App.js              # Root component
            │   ├── App.css
            │   ├── index.css
            │   └── reportWebVitals.js
            ├── package.json            # With react-scripts
            └── README.md
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### React Basic Dependencies:
            ```bash
            npx create-react-app my-app
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "react": "^18.2.0",
                "react-dom": "^18.2.0",
                "react-scripts": "5.0.1",
                "web-vitals": "^2.1.4"
              },
              "scripts": {
                "start": "react-scripts start",
                "build": "react-scripts build",
                "test": "react-scripts test",
                "eject": "react-scripts eject"
              }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### React Basic Configurations:
            - **public/index.html**: MUST contain `<div id="root"></div>`
            - **src/index.js**: `ReactDOM.createRoot(document.getElementById('root')).render(<App />)`
            - **.gitignore**: build/, node_modules/, .env.local
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### React Basic Validation:
            - package.json contains react, react-dom, react-scripts
            - public/index.html has div#root
            - src/index.js imports react-dom/client
            - src/App.js has a default export
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### React Basic - Errors to avoid:
            - **index.html without div#root** -> the app never mounts
            - **Missing react-scripts** -> the build fails
            - **public/ folder inside src/** -> static assets are not served
            """)

    def critical_requirements(self) -> list[str]:
        return [
            "Use EXACT command: npx create-react-app my-app",
            'public/index.html MUST have a div with id="root"',
            "All official CRA patterns and structure",
        ]


class ReactViteModule(TechnologyModule):
    key = Technology.REACT_VITE
    title = "React + Vite"
    category = ModuleCategory.FRONTEND

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### React + Vite Structure:
            ```
            my-react-app/
            ├── index.html             # In the ROOT, not in public/!
            ├── src/
            │   ├── main.jsx           # Entry point (.jsx, not .js!)
            │   ├── App.jsx            # Root component
            │   ├── App.css
            │   └── index.css
            ├── vite.config.js
            ├── package.json
            └── .gitignore
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### React + Vite Dependencies:
            ```bash
            npm create vite@latest my-react-app -- --template react
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "react": "^18.2.0",
                "react-dom": "^18.2.0"
              },
              "devDependencies": {
                "@vitejs/plugin-react": "^4.2.1",
                "vite": "^5.2.0"
              },
              "scripts": {
                "dev": "vite",
                "build": "vite build",
                "preview": "vite preview"
              }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### React + Vite Configurations:

            **vite.config.js:**
            ```javascript
            import { defineConfig } from 'vite'
            import react from '@vitejs/plugin-react'

            export default defineConfig({
              plugins: [react()],
            })
            ```

            **index.html** (in the root):
            ```html
            <!doctype html>
            <html lang="en">
              <head>
                <meta charset="UTF-8" />
                <meta name="viewport" content="width=device-width, initial-scale=1.0" />
                <title>Vite + React</title>
              </head>
              <body>
                <div id="root"></div>
                <script type="module" src="/src/main.jsx"></script>
              </body>
            </html>
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### React + Vite Validation:
            - index.html in the root (not in public/)
            - package.json contains react, react-dom, @vitejs/plugin-react, vite
            - vite.config.js imports @vitejs/plugin-react and registers react()
            - src/main.jsx is the entry point
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### React + Vite - Errors to avoid:
            - **index.html in public/** instead of the root
            - **main.js instead of main.jsx** -> JSX is not transformed
            - **vite.config.js without the react plugin**
            - **Deprecated ReactDOM.render** -> use createRoot (React 18)
            """)

    def critical_requirements(self) -> list[str]:
        return [
            "Use command: npm create vite@latest -- --template react",
            "index.html MUST be in the project ROOT",
            "Entry point MUST be main.jsx (not main.js)",
            "Use the React 18 createRoot API",
        ]


class NextJSModule(TechnologyModule):
    key = Technology.NEXTJS
    title = "Next.js"
    category = ModuleCategory.FRONTEND
    build_output_dir = ".next"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Next.js (App Router) Structure:
            ```
            my-next-app/
            ├── app/
            │   ├── layout.js          # Root layout, exports metadata
            │   ├── page.js            # Home route
            │   └── globals.css
            ├── public/
            ├── next.config.mjs
            ├── package.json
            └── .gitignore
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Next.js Dependencies:
            ```bash
            npx create-next-app@latest my-next-app --js --app --eslint
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "next": "^14.2.0",
                "react": "^18.2.0",
                "react-dom": "^18.2.0"
              },
              "scripts": {
                "dev": "next dev",
                "build": "next build",
                "start": "next start",
                "lint": "next lint"
              }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Next.js Configurations:

            **next.config.mjs** (standalone output for Docker):
            ```javascript
            /** @type {import('next').NextConfig} */
            const nextConfig = {
              output: 'standalone',
            };

            export default nextConfig;
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Next.js Validation:
            - app/layout.js and app/page.js present
            - package.json contains next, react, react-dom
            - next.config.mjs sets output: 'standalone'
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Next.js - Errors to avoid:
            - **Mixing pages/ and app/ routers** -> ambiguous routing
            - **Missing root layout** -> build fails
            - **Serving with nginx** -> Next.js needs its own Node server (next start)
            """)


class Vue3BasicModule(TechnologyModule):
    key = Technology.VUE3_BASIC
    title = "Vue 3"
    category = ModuleCategory.FRONTEND

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 Structure:
            ```
            ./
            ├── index.html             # In the ROOT!
            ├── src/
            │   ├── main.js            # Entry point
            │   ├── App.vue            # Root component
            │   ├── components/
            │   │   └── HelloWorld.vue
            │   └── assets/
            │       └── vue.svg
            ├── vite.config.js         # With @vitejs/plugin-vue
            ├── package.json
            ├── README.md
            ├── Dockerfile
            ├── docker-compose.yml
            ├── nginx.conf
            └── .gitignore
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 Dependencies:
            ```bash
            npm create vue@latest .
            ```

            **Essential package.json:**
            ```json
            {
              "name": "vue-project",
              "version": "0.0.0",
              "scripts": {
                "dev": "vite",
                "build": "vite build",
                "preview": "vite preview"
              },
              "dependencies": {
                "vue": "^3.4.21"
              },
              "devDependencies": {
                "@vitejs/plugin-vue": "^5.0.4",
                "vite": "^5.2.0"
              }
            }
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 Basic Validation:
            - index.html in the ROOT (not in public/)
            - package.json contains vue, @vitejs/plugin-vue, vite
            - vite.config.js present with the vue plugin and the @ alias
            - src/main.js imports createApp from 'vue'
            - Script tag in index.html: "/src/main.js"
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 Basic - Errors to avoid:
            - **index.html in public/** instead of the root
            - **Script src="./src/main.js"** instead of "/src/main.js"
            - **Vite config without the @ alias**
            - **Missing import { createApp }**
            """)

    def critical_requirements(self) -> list[str]:
        return [
            "index.html MUST be in the project ROOT",
            "Use command: npm create vue@latest",
            "vite.config.js with @ alias",
        ]


class Vue3ViteModule(TechnologyModule):
    key = Technology.VUE3_VITE
    title = "Vue 3 + Vite"
    category = ModuleCategory.FRONTEND

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 + Vite Structure:
            ```
            ./
            ├── index.html             # In the ROOT!
            ├── src/
            │   ├── main.js            # Entry point
            │   ├── App.vue            # Root component
            │   ├── router/
            │   │   └── index.js       # Router configuration (if enabled)
            │   ├── stores/
            │   │   └── counter.js     # Pinia store (if enabled)
            │   ├── components/
            │   │   └── HelloWorld.vue
            │   └── assets/
            │       └── vue.svg
            ├── vite.config.js         # With @vitejs/plugin-vue
            ├── package.json
            ├── README.md
            ├── Dockerfile
            ├── docker-compose.yml
            ├── nginx.conf
            └── .gitignore
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 + Vite Dependencies:
            ```bash
            npm create vue@latest .
            # Select Router=Yes, Pinia=Yes for a full featured app
            ```

            **package.json with Router + Pinia:**
            ```json
            {
              "name": "vue-project",
              "version": "0.0.0",
              "scripts": {
                "dev": "vite",
                "build": "vite build",
                "preview": "vite preview"
              },
              "dependencies": {
                "vue": "^3.4.21",
                "vue-router": "^4.3.0",
                "pinia": "^2.1.7"
              },
              "devDependencies": {
                "@vitejs/plugin-vue": "^5.0.4",
                "vite": "^5.2.0"
              }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 + Vite Configurations:

            **vite.config.js:**
            ```javascript
            import { defineConfig } from 'vite'
            import vue from '@vitejs/plugin-vue'
            import { fileURLToPath, URL } from 'node:url'

            export default defineConfig({
              plugins: [vue()],
              resolve: {
                alias: {
                  '@': fileURLToPath(new URL('./src', import.meta.url))
                }
              }
            })
            ```

            **src/main.js with Router + Pinia:**
            ```javascript
            import { createApp } from 'vue'
            import { createPinia } from 'pinia'
            import App from './App.vue'
            import router from './router'

            const app = createApp(App)

            app.use(createPinia())
            app.use(router)

            app.mount('#app')
            ```

            **index.html in the ROOT:**
            ```html
            <!DOCTYPE html>
            <html lang="en">
              <head>
                <meta charset="UTF-8">
                <link rel="icon" href="/favicon.ico">
                <meta name="viewport" content="width=device-width, initial-scale=1.0">
                <title>Vue App</title>
              </head>
              <body>
                <div id="app"></div>
                <script type="module" src="/src/main.js"></script>
              </body>
            </html>
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 + Vite Validation:
            - index.html in the ROOT (not in public/)
            - package.json contains vue, @vitejs/plugin-vue, vite
            - vite.config.js present with the vue plugin and the @ alias
            - src/main.js imports createApp from 'vue'
            - Script tag in index.html: "/src/main.js" (absolute path)
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Vue 3 + Vite - Errors to avoid:
            - **index.html in public/** instead of the root
            - **Script src="./src/main.js"** instead of "/src/main.js"
            - **Vite config without the @ alias**
            - **Missing import { createApp }**
            - **Router without createWebHistory()**
            - **Pinia without createPinia()**
            """)

    def critical_requirements(self) -> list[str]:
        return [
            "index.html MUST be in project ROOT, NOT in public/ folder",
            "Use EXACT official command: npm create vue@latest",
            'Script src="/src/main.js" with absolute path',
            "vite.config.js MUST include @ alias configuration",
            "All paths must use forward slashes (/)",
        ]


class AngularCLIModule(TechnologyModule):
    key = Technology.ANGULAR_CLI
    title = "Angular (CLI)"
    category = ModuleCategory.FRONTEND
    build_output_dir = "dist/app/browser"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Angular CLI Structure:
            ```
            my-app/
            ├── src/
            │   ├── main.ts            # bootstrapApplication(AppComponent, appConfig)
            │   ├── index.html         # Contains <app-root>
            │   ├── styles.css
            │   └── app/
            │       ├── app.component.ts
            │       ├── app.component.html
            │       ├── app.config.ts
            │       └── app.routes.ts
            ├── angular.json
            ├── tsconfig.json
            ├── tsconfig.app.json
            └── package.json
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Angular Dependencies:
            ```bash
            npx @angular/cli@17 new my-app --routing --style=css
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "@angular/core": "^17.3.0",
                "@angular/common": "^17.3.0",
                "@angular/platform-browser": "^17.3.0",
                "@angular/router": "^17.3.0",
                "rxjs": "~7.8.0",
                "zone.js": "~0.14.3"
              },
              "devDependencies": {
                "@angular/cli": "^17.3.0",
                "@angular/compiler-cli": "^17.3.0",
                "typescript": "~5.4.2"
              },
              "scripts": {
                "start": "ng serve",
                "build": "ng build"
              }
            }
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Angular Validation:
            - angular.json present with a build target
            - src/index.html contains <app-root>
            - src/main.ts bootstraps the root component
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Angular - Errors to avoid:
            - **Mismatched @angular/* versions** -> compilation errors
            - **Missing zone.js** -> change detection never runs
            - **Wrong dist path in Dockerfile** -> nginx serves an empty directory
            """)
